"""
REPL - Interactive shell for TableDB

Provides a command-line interface for building and inspecting
the in-memory database, and the entry point that can serve the
HTTP API instead.
"""

import logging
import os
import shlex
import sys
from typing import List, Optional

from .errors import StoreError
from .schema import Table
from .store import TableStore


class REPL:
    """
    Interactive REPL (Read-Eval-Print Loop) for TableDB.

    Features:
    - Dot commands for every store operation
    - Quoted arguments (".insert users 'Ann Lee' 30")
    - Pretty-printed tables
    """

    BANNER = """
TableDB - in-memory typed tables

Type .help for commands.
"""

    HELP = """
Database:
  .create <name>                    Create the database
  .rename <name>                    Rename the database
  .drop                             Delete the database and all its tables
  .tables                           List all tables

Tables:
  .addtable <name>                  Add an empty table
  .renametable <old> <new>          Rename a table
  .droptable <name>                 Delete a table
  .table <name>                     Show a table's columns and rows

Columns (types: integer, real, char, string, boolean):
  .addcol <table> <name> <type>     Add a column
  .renamecol <table> <old> <new>    Rename a column
  .dropcol <table> <index>          Delete the column at index

Rows:
  .addrow <table>                   Add a row of default values
  .insert <table> <v1> <v2> ...     Add a row with one value per column
  .set <table> <col> <row> <value>  Set a single cell
  .droprow <table> <index>          Delete a row (later rows shift down)

Projection:
  .project <table> <i,j,...>        Show the selected columns, in order

  .help                             Show this help message
  .clear                            Clear the screen
  .quit / .exit                     Exit the REPL
"""

    def __init__(self, store: Optional[TableStore] = None):
        """Initialize REPL over a store (a fresh one if omitted)."""
        self.store = store if store is not None else TableStore()
        self.running = False

    def run(self) -> None:
        """Start the REPL loop."""
        self.running = True
        print(self.BANNER)

        while self.running:
            try:
                line = input("tabledb> ")
                self.execute(line)
            except KeyboardInterrupt:
                print("\n(Use .quit to exit)")
            except EOFError:
                print()
                self._quit()

    def execute(self, line: str) -> None:
        """Run one command line and print its outcome."""
        line = line.strip()
        if not line:
            return

        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"Error: {e}")
            return

        command, args = parts[0].lower(), parts[1:]
        handler = self.COMMANDS.get(command)
        if handler is None:
            print(f"Unknown command: {command}")
            print("Type .help for available commands.")
            return

        try:
            handler(self, args)
        except StoreError as e:
            print(f"Error: {e.message}")
        except (ValueError, IndexError):
            print(f"Usage error for {command}. Type .help for available commands.")

    def _quit(self, args: Optional[List[str]] = None) -> None:
        """Exit the REPL."""
        print("Goodbye!")
        self.running = False

    def _help(self, args: List[str]) -> None:
        print(self.HELP)

    def _clear(self, args: List[str]) -> None:
        os.system('clear' if os.name == 'posix' else 'cls')

    def _create(self, args: List[str]) -> None:
        database = self.store.create_database(args[0])
        print(f"Database '{database.name}' created")

    def _rename(self, args: List[str]) -> None:
        database = self.store.rename_database(args[0])
        print(f"Database renamed to '{database.name}'")

    def _drop(self, args: List[str]) -> None:
        database = self.store.delete_database()
        print(f"Database '{database.name}' deleted")

    def _show_tables(self, args: List[str]) -> None:
        """List all tables."""
        tables = self.store.list_tables()
        if tables:
            print("\nTables:")
            for table in tables:
                print(f"  {table.name} ({len(table.columns)} columns, {len(table.rows)} rows)")
            print()
        else:
            print("No tables found.")

    def _add_table(self, args: List[str]) -> None:
        table = self.store.add_table(args[0])
        print(f"Table '{table.name}' created")

    def _rename_table(self, args: List[str]) -> None:
        table = self.store.rename_table(args[0], args[1])
        print(f"Table '{args[0]}' renamed to '{table.name}'")

    def _drop_table(self, args: List[str]) -> None:
        table = self.store.delete_table(args[0])
        print(f"Table '{table.name}' dropped")

    def _show_table(self, args: List[str]) -> None:
        self._print_table(self.store.get_table(args[0]))

    def _add_column(self, args: List[str]) -> None:
        column = self.store.add_column(args[0], args[1], args[2])
        print(f"Column '{column.name}' ({column.dtype.value}) added to '{args[0]}'")

    def _rename_column(self, args: List[str]) -> None:
        column = self.store.rename_column(args[0], args[1], args[2])
        print(f"Column '{args[1]}' renamed to '{column.name}'")

    def _drop_column(self, args: List[str]) -> None:
        column = self.store.delete_column(args[0], int(args[1]))
        print(f"Column '{column.name}' dropped")

    def _add_row(self, args: List[str]) -> None:
        index = self.store.add_row(args[0])
        print(f"Row {index} added")

    def _insert(self, args: List[str]) -> None:
        index, _ = self.store.insert_row(args[0], args[1:])
        print(f"Row {index} added")

    def _set(self, args: List[str]) -> None:
        if len(args) != 4:
            raise ValueError(args)
        cell = self.store.set_cell_value(args[3], args[0], int(args[1]), int(args[2]))
        print(f"Cell set to {cell}")

    def _drop_row(self, args: List[str]) -> None:
        self.store.delete_row(args[0], int(args[1]))
        print(f"Row {args[1]} deleted")

    def _project(self, args: List[str]) -> None:
        indices = [int(i) for i in args[1].replace(' ', '').split(',')]
        self._print_table(self.store.project(args[0], indices))

    def _print_table(self, table: Table) -> None:
        """Pretty-print a table's header and rows."""
        if not table.columns:
            print(f"Table '{table.name}' has no columns ({len(table.rows)} rows)")
            return

        headers = [f"{col.name}:{col.dtype.value}" for col in table.columns]
        widths = [len(h) for h in headers]
        cells = [[str(cell) for cell in row.values] for row in table.rows]

        for row in cells:
            for i, val in enumerate(row):
                widths[i] = max(widths[i], len(val))

        # Limit column width for readability
        max_width = 40
        widths = [min(w, max_width) for w in widths]

        print()
        print("# | " + " | ".join(h.ljust(w)[:w] for h, w in zip(headers, widths)))
        print("--+-" + "-+-".join("-" * w for w in widths))
        for index, row in enumerate(cells):
            print(f"{index} | " + " | ".join(v.ljust(w)[:w] for v, w in zip(row, widths)))

        print(f"\n({len(table.rows)} row(s))")

    COMMANDS = {
        '.quit': _quit,
        '.exit': _quit,
        '.q': _quit,
        '.help': _help,
        '.clear': _clear,
        '.create': _create,
        '.rename': _rename,
        '.drop': _drop,
        '.tables': _show_tables,
        '.addtable': _add_table,
        '.renametable': _rename_table,
        '.droptable': _drop_table,
        '.table': _show_table,
        '.addcol': _add_column,
        '.renamecol': _rename_column,
        '.dropcol': _drop_column,
        '.addrow': _add_row,
        '.insert': _insert,
        '.set': _set,
        '.droprow': _drop_row,
        '.project': _project,
    }


def main(argv: Optional[List[str]] = None):
    """Entry point for the REPL and the HTTP server."""
    import argparse

    parser = argparse.ArgumentParser(
        description="TableDB - in-memory typed tables"
    )
    parser.add_argument(
        '--serve', action='store_true',
        help='Serve the HTTP API instead of starting the shell'
    )
    parser.add_argument(
        '--host', default='127.0.0.1',
        help='Host to bind the HTTP API to (default: 127.0.0.1)'
    )
    parser.add_argument(
        '--port', type=int, default=5000,
        help='Port for the HTTP API (default: 5000)'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='Run the HTTP API in Flask debug mode'
    )
    parser.add_argument(
        '-d', '--database',
        help='Create a database with this name at startup'
    )
    parser.add_argument(
        '--log-level', default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    store = TableStore()
    if args.database:
        store.create_database(args.database)

    if args.serve:
        from ..api.app import create_app

        app = create_app(store)
        print(f"Starting server at http://{args.host}:{args.port}", file=sys.stderr)
        app.run(debug=args.debug, host=args.host, port=args.port)
        return

    # Start interactive REPL
    repl = REPL(store)
    repl.run()


if __name__ == '__main__':
    main()
