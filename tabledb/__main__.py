#!/usr/bin/env python3
"""
TableDB - In-memory typed tables
Entry point script

Run the REPL:
    python -m tabledb

Serve the HTTP API:
    python -m tabledb --serve --port 5000

Or use as a library:
    from tabledb import TableStore
    store = TableStore()
    store.create_database("shop")
"""

from tabledb.core.repl import main

if __name__ == '__main__':
    main()
