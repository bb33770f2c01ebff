#!/usr/bin/env python3
"""
HTTP API - JSON façade over a TableStore

Routes mirror the store's operations:
- /api/Database                     create, rename, delete, inspect
- /api/Tables                       add, rename, delete, inspect tables
- /api/Tables/<t>/Columns           add, rename, delete, inspect columns
- /api/Tables/<t>/Rows              insert, replace, delete rows, set cells
- /api/Tables/Project/<t>/<names>   column projection

Run:
    python -m tabledb --serve

Then visit: http://localhost:5000/api/Database
"""

import logging
from typing import Any, Mapping, Optional

from flask import Blueprint, Flask, abort, current_app, request

from ..core.errors import StoreError
from ..core.store import TableStore
from .envelope import (
    column_links, column_list_links, database_links, envelope, row_links, table_links,
)

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__, url_prefix='/api')


def get_store() -> TableStore:
    return current_app.extensions['tabledb']


def _json_field(key: str) -> Any:
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or key not in body:
        abort(400, description=f"Request body must be a JSON object with a '{key}' field")
    return body[key]


# /Tables/Project/... is the projection route, so a table with this name
# would shadow its own column routes.
RESERVED_TABLE_NAMES = ('Project',)


def _check_table_name(name: str) -> None:
    if name in RESERVED_TABLE_NAMES:
        abort(400, description=f"{name} is reserved and cannot be used as a table name")


# ----------------------------------------------------------------------
# Database
# ----------------------------------------------------------------------

@api.route('/Database', methods=['GET'])
def get_database():
    database = get_store().get_database()
    return envelope(database.to_dict(), database_links(database))


@api.route('/Database/<name>', methods=['POST'])
def create_database(name):
    database = get_store().create_database(name)
    return envelope(database.to_dict(), database_links(database))


@api.route('/Database/<name>', methods=['PUT'])
def rename_database(name):
    database = get_store().rename_database(name)
    return envelope(database.to_dict(), database_links(database))


@api.route('/Database', methods=['DELETE'])
def delete_database():
    database = get_store().delete_database()
    return envelope(database.to_dict(), {'createDatabase': '/Database/{name}'})


# ----------------------------------------------------------------------
# Tables
# ----------------------------------------------------------------------

@api.route('/Tables', methods=['GET'])
def list_tables():
    tables = get_store().list_tables()
    return envelope(
        [table.to_dict() for table in tables],
        {table.name: f'/Tables/{table.name}' for table in tables},
    )


@api.route('/Tables/<name>', methods=['GET'])
def get_table(name):
    table = get_store().get_table(name)
    return envelope(table.to_dict(), table_links(table))


@api.route('/Tables/<name>', methods=['POST'])
def add_table(name):
    _check_table_name(name)
    table = get_store().add_table(name)
    return envelope(table.to_dict(), table_links(table))


@api.route('/Tables/<old_name>/<new_name>', methods=['PUT'])
def rename_table(old_name, new_name):
    _check_table_name(new_name)
    table = get_store().rename_table(old_name, new_name)
    return envelope(table.to_dict(), table_links(table))


@api.route('/Tables/<name>', methods=['DELETE'])
def delete_table(name):
    table = get_store().delete_table(name)
    return envelope(table.to_dict(), {'tables': '/Tables', 'createTable': '/Tables/{name}'})


# ----------------------------------------------------------------------
# Columns
# ----------------------------------------------------------------------

@api.route('/Tables/<table_name>/Columns', methods=['GET'])
def list_columns(table_name):
    columns = get_store().list_columns(table_name)
    return envelope([col.to_dict() for col in columns], column_list_links(table_name, columns))


@api.route('/Tables/<table_name>/Columns/<column_name>', methods=['GET'])
def get_column(table_name, column_name):
    column = get_store().get_column(table_name, column_name)
    return envelope(column.to_dict(), column_links(table_name, column))


@api.route('/Tables/<table_name>/Columns/<column_name>/<column_type>', methods=['POST'])
def add_column(table_name, column_name, column_type):
    column = get_store().add_column(table_name, column_name, column_type)
    return envelope(column.to_dict(), column_links(table_name, column))


@api.route('/Tables/<table_name>/Columns/<old_name>/<new_name>', methods=['PUT'])
def rename_column(table_name, old_name, new_name):
    column = get_store().rename_column(table_name, old_name, new_name)
    return envelope(column.to_dict(), column_links(table_name, column))


@api.route('/Tables/<table_name>/Columns/<column_name>', methods=['DELETE'])
def delete_column(table_name, column_name):
    column = get_store().delete_column_named(table_name, column_name)
    return envelope(
        column.to_dict(),
        {'addColumn': f'/Tables/{table_name}/Columns/{{columnName}}/{{columnType}}'},
    )


# ----------------------------------------------------------------------
# Rows
# ----------------------------------------------------------------------

@api.route('/Tables/<table_name>/Rows', methods=['GET'])
def list_rows(table_name):
    rows = get_store().list_rows(table_name)
    return envelope(
        [row.to_dict() for row in rows],
        {f'Row {i}': f'/Tables/{table_name}/Rows/{i}' for i in range(len(rows))},
    )


@api.route('/Tables/<table_name>/Rows/<int:row_index>', methods=['GET'])
def get_row(table_name, row_index):
    row = get_store().get_row(table_name, row_index)
    return envelope(row.to_dict(), row_links(table_name, row_index))


@api.route('/Tables/<table_name>/Rows', methods=['POST'])
def insert_row(table_name):
    values = _json_field('values')
    if not isinstance(values, list):
        abort(400, description="'values' must be a JSON array")
    index, row = get_store().insert_row(table_name, values)
    return envelope(row.to_dict(), row_links(table_name, index))


@api.route('/Tables/<table_name>/Rows/<int:row_index>', methods=['PUT'])
def update_row(table_name, row_index):
    values = _json_field('values')
    if not isinstance(values, list):
        abort(400, description="'values' must be a JSON array")
    row = get_store().update_row(table_name, row_index, values)
    return envelope(row.to_dict(), row_links(table_name, row_index))


@api.route('/Tables/<table_name>/Rows/<int:row_index>/<int:column_index>', methods=['PUT'])
def set_cell(table_name, row_index, column_index):
    value = _json_field('value')
    cell = get_store().set_cell_value(value, table_name, column_index, row_index)
    return envelope(cell.value, row_links(table_name, row_index))


@api.route('/Tables/<table_name>/Rows/<int:row_index>', methods=['DELETE'])
def delete_row(table_name, row_index):
    row = get_store().delete_row(table_name, row_index)
    return envelope(row.to_dict(), {
        'rows': f'/Tables/{table_name}/Rows',
        'addRow': f'/Tables/{table_name}/Rows',
    })


# ----------------------------------------------------------------------
# Projection
# ----------------------------------------------------------------------

@api.route('/Tables/Project/<table_name>/<column_names>', methods=['GET'])
def project(table_name, column_names):
    names = column_names.replace(' ', '').split(',')
    projected = get_store().project_columns(table_name, names)
    links = column_list_links(table_name, projected.columns)
    links['table'] = f'/Tables/{table_name}'
    return envelope(projected.to_dict(), links)


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@api.app_errorhandler(StoreError)
def handle_store_error(error: StoreError):
    logger.info("%s %s rejected: %s (%s)", request.method, request.path, error.message, error.kind)
    return error.to_dict(), error.status


@api.app_errorhandler(400)
def handle_bad_request(error):
    return {'error': error.description, 'kind': 'BadRequest'}, 400


@api.app_errorhandler(404)
def handle_not_found(error):
    return {'error': error.description, 'kind': 'NotFound'}, 404


def create_app(store: Optional[TableStore] = None,
               config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        store: TableStore to serve (a fresh one if omitted)
        config: Extra config values, applied before TABLEDB_* environment variables

    Config:
        DATABASE_NAME: If set, a database with this name is created at startup
    """
    app = Flask(__name__)
    app.config.from_mapping(DATABASE_NAME=None)
    if config:
        app.config.from_mapping(config)
    app.config.from_prefixed_env('TABLEDB')
    app.json.sort_keys = False

    store = store if store is not None else TableStore()
    if app.config['DATABASE_NAME'] and not store.is_initialized:
        store.create_database(app.config['DATABASE_NAME'])
    app.extensions['tabledb'] = store

    app.register_blueprint(api)
    return app
