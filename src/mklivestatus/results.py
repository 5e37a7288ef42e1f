#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

"""
Reprojections of a :py:class:`QueryResult`. None of these talk to the backend
or change the result they are given.
"""

from .common import CheckValue
from .exception import IllegalArgumentException, KeyFieldNotFoundException


def limit_rows(rows, limit=None):
    """
    Returns the first limit rows. A limit of None or below 1 means no limit.

    :param rows: the rows.
    :type rows: list
    :param limit: the maximum number of rows.
    :type limit: int or None
    :returns: the rows, in their original order.
    :rtype: list
    """
    if limit is None:
        return rows
    CheckValue.check_int_ge_zero(limit, 'limit')
    if limit >= 1 and len(rows) > limit:
        return rows[:limit]
    return rows


def to_dicts(keys, rows):
    """
    Zips the keys with every row.

    :returns: one dict per row, in row order.
    :rtype: list(dict)
    """
    keys = [] if keys is None else keys
    return [dict(zip(keys, row)) for row in rows]


def index_by(dicts, key_field):
    """
    Indexes rows, as returned by :py:func:`to_dicts`, by the value of one
    field. A later row with the same value replaces an earlier one.

    :param dicts: the rows.
    :type dicts: list(dict)
    :param key_field: the field to index by.
    :type key_field: str
    :returns: the rows by value of key_field.
    :rtype: dict
    :raises KeyFieldNotFoundException: raises the exception if a row has no
        value for key_field.
    """
    if key_field is None:
        raise IllegalArgumentException(
            'key is required for select_all_dict')
    indexed = {}
    for row in dicts:
        if row.get(key_field) is None:
            raise KeyFieldNotFoundException(key_field, row.keys())
        indexed[row[key_field]] = row
    return indexed


def select_columns(rows, columns=None):
    """
    Flattens the selected columns of all rows into one list, row by row.
    Columns are numbered from 1. With two columns the list reads as pairs,
    ``dict(zip(values[::2], values[1::2]))`` maps the first to the second.
    Missing fields are None.

    :param rows: the rows.
    :type rows: list(list)
    :param columns: the column numbers, by default only the first column.
    :type columns: list(int)
    :returns: the values.
    :rtype: list
    """
    if columns is None:
        columns = [1]
    CheckValue.check_list(columns, 'columns')
    for number in columns:
        if not CheckValue.is_int(number) or number < 1:
            raise IllegalArgumentException(
                'columns must be numbered from 1. Got:' + str(number))
    values = []
    for row in rows:
        for number in columns:
            values.append(row[number - 1] if number <= len(row) else None)
    return values


def first(items):
    # Returns the first item, or None if there is none.
    if not items:
        return None
    return items[0]
