"""
Response envelope and hypermedia links for the HTTP API

Every successful response has the shape {"value": ..., "links": {...}}.
"""

from typing import Any, Dict, Optional

from flask import jsonify

from ..core.schema import Column, Database, Table


def envelope(value: Any, links: Optional[Dict[str, str]] = None):
    return jsonify({'value': value, 'links': links or {}})


def database_links(database: Database) -> Dict[str, str]:
    links = {
        'updateDatabase': '/Database/{newName}',
        'deleteDatabase': '/Database',
        'tables': '/Tables',
        'createTable': '/Tables/{name}',
    }
    if database.tables:
        links['updateTable'] = '/Tables/{oldName}/{newName}'
        links['deleteTable'] = '/Tables/{name}'
    return links


def table_links(table: Table) -> Dict[str, str]:
    name = table.name
    links = {
        'updateTable': f'/Tables/{name}/{{newName}}',
        'deleteTable': f'/Tables/{name}',
        'columns': f'/Tables/{name}/Columns',
        'rows': f'/Tables/{name}/Rows',
        'addColumn': f'/Tables/{name}/Columns/{{columnName}}/{{columnType}}',
        'addRow': f'/Tables/{name}/Rows',
    }
    if table.columns:
        links['updateColumn'] = f'/Tables/{name}/Columns/{{oldColumnName}}/{{newColumnName}}'
        links['deleteColumn'] = f'/Tables/{name}/Columns/{{columnName}}'
    if table.rows:
        links['updateRow'] = f'/Tables/{name}/Rows/{{id}}'
        links['deleteRow'] = f'/Tables/{name}/Rows/{{id}}'
    return links


def column_links(table_name: str, column: Column) -> Dict[str, str]:
    return {
        'updateColumn': f'/Tables/{table_name}/Columns/{column.name}/{{newColumnName}}',
        'deleteColumn': f'/Tables/{table_name}/Columns/{column.name}',
    }


def column_list_links(table_name: str, columns) -> Dict[str, str]:
    return {
        f'{col.name} ({col.dtype.value})': f'/Tables/{table_name}/Columns/{col.name}'
        for col in columns
    }


def row_links(table_name: str, index: int) -> Dict[str, str]:
    return {
        'updateRow': f'/Tables/{table_name}/Rows/{index}',
        'deleteRow': f'/Tables/{table_name}/Rows/{index}',
    }
