#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from logging import (
    DEBUG, NOTSET, Formatter, StreamHandler, WARNING, getLogger)

from . import results
from .client import Client
from .common import CheckValue
from .config import LivestatusConfig
from .exception import IllegalArgumentException, IllegalStateException


class Livestatus(object):
    """
    Livestatus is a handle to query the runtime data of a Nagios compatible
    monitoring core through the check_mk livestatus addon. The handle talks to
    livestatus over a UNIX socket or over TCP, as configured by a
    :py:class:`LivestatusConfig`.

    A handle can be created from a config, from the path of the UNIX socket,
    or from keyword options::

        ls = Livestatus('/var/lib/nagios3/rw/livestatus.sock')
        ls = Livestatus(server='localhost:6557', keepalive=True)
        hosts = ls.select_all('GET hosts')

    Statements are livestatus queries such as ``GET hosts`` with optional
    ``Columns:``, ``Filter:`` or ``Stats:`` lines, or external commands
    starting with ``COMMAND``. The handle adds the ``Separators:``,
    ``ResponseHeader:`` and ``KeepAlive:`` headers itself, statements that
    contain them are rejected.

    The ``select_*`` methods shape the result in the way of the Perl DBI
    methods of the same names. Column keys are taken from the ``Columns:``
    line of the statement, otherwise from its ``Stats:`` lines, otherwise
    from the first row livestatus returns.

    For Error and Exception Handling, by default every failure is raised as a
    :py:class:`LivestatusException`. With errors_are_fatal disabled, failed
    queries return None and the error is available from
    :py:meth:`get_last_error` until the next query. Every handle has its own
    last error.

    A handle is not thread-safe. It serves one request at a time, so a handle
    shared among threads must be synchronized externally. A handle using
    keepalive holds a connection open and must be closed with
    :py:meth:`close`.

    :param config: a LivestatusConfig, or the path of the UNIX socket.
    :type config: LivestatusConfig or str
    :param options: keyword options as accepted by
        :py:meth:`LivestatusConfig.from_options`, when no config is given.
    :raises IllegalArgumentException: raises the exception if the
        configuration is invalid.
    """

    def __init__(self, config=None, **options):
        if isinstance(config, str):
            options['socket'] = config
            config = None
        if config is None:
            config = LivestatusConfig.from_options(**options)
        elif options:
            raise IllegalArgumentException(
                'Pass either a config or options, not both.')
        if not isinstance(config, LivestatusConfig):
            raise IllegalArgumentException(
                'config must be an instance of LivestatusConfig.')
        config = config.clone()
        logger = self._get_logger(config)
        self._client = Client(config, logger)

    def do(self, statement):
        """
        Sends a statement without fetching the result, typically an external
        command::

            ls.do('COMMAND [1234567890] DISABLE_HOST_CHECK;localhost')

        :param statement: the statement.
        :type statement: str
        :returns: True.
        :rtype: bool
        :raises LivestatusException: raises the exception if the statement
            fails and errors are fatal.
        """
        self._get_client().execute(statement)
        return True

    def query(self, statement):
        """
        Sends a statement and returns the decoded result, the column keys and
        the data rows.

        :param statement: the statement.
        :type statement: str
        :returns: the result, or None if the statement failed and errors are
            not fatal.
        :rtype: QueryResult or None
        :raises LivestatusException: raises the exception if the statement
            fails and errors are fatal.
        """
        return self._get_client().execute(statement)

    def select_all(self, statement, slice=False, limit=None):
        """
        Sends a query and returns a list of rows, each a list of values::

            rows = ls.select_all('GET hosts')

        To get a list of dicts from the first 2 rows only::

            dicts = ls.select_all('GET hosts', slice=True, limit=2)

        The limit is applied by the client after the whole result was read.

        :param statement: the statement.
        :type statement: str
        :param slice: True to return each row as a dict by column key.
        :type slice: bool
        :param limit: the maximum number of rows, None for all rows.
        :type limit: int
        :returns: the rows, or None if the query failed and errors are not
            fatal.
        :rtype: list(list(str)) or list(dict)
        """
        CheckValue.check_boolean(slice, 'slice')
        result = self.query(statement)
        if result is None:
            return None
        rows = results.limit_rows(result.get_rows(), limit)
        if slice:
            return results.to_dicts(result.get_keys(), rows)
        return rows

    def select_all_dict(self, statement, key_field):
        """
        Sends a query and returns the rows as dicts, indexed by the value of
        key_field::

            hosts = ls.select_all_dict('GET hosts', 'name')

        :param statement: the statement.
        :type statement: str
        :param key_field: the column to index by.
        :type key_field: str
        :returns: the rows by key, or None if the query failed and errors are
            not fatal.
        :rtype: dict
        :raises IllegalArgumentException: raises the exception if key_field is
            None.
        :raises KeyFieldNotFoundException: raises the exception if a row has no
            value for key_field, whether or not errors are fatal.
        """
        if key_field is None:
            raise IllegalArgumentException(
                'key is required for select_all_dict')
        dicts = self.select_all(statement, slice=True)
        if dicts is None:
            return None
        return results.index_by(dicts, key_field)

    def select_column(self, statement, columns=None):
        """
        Sends a query and returns the values of the first column::

            names = ls.select_column('GET hosts\\nColumns: name')

        To get a different column pass its number, counting from 1::

            contacts = ls.select_column(
                'GET hosts\\nColumns: name contacts', columns=[2])

        Two columns give a flat list of pairs, which turns into a dict of the
        first column to the second::

            values = ls.select_column(
                'GET hosts\\nColumns: name contacts', columns=[1, 2])
            contacts = dict(zip(values[::2], values[1::2]))

        :param statement: the statement.
        :type statement: str
        :param columns: the column numbers, by default [1].
        :type columns: list(int)
        :returns: the values, an empty list if nothing was found, or None if
            the query failed and errors are not fatal.
        :rtype: list(str)
        """
        rows = self.select_all(statement)
        if rows is None:
            return None
        return results.select_columns(rows, columns)

    def select_row(self, statement):
        """
        Sends a query and returns the values of the first row as a tuple.

        :returns: the row, or None if nothing was found.
        :rtype: tuple or None
        """
        row = self.select_row_list(statement)
        if row is None:
            return None
        return tuple(row)

    def select_row_list(self, statement):
        """
        Sends a query and returns the first row as a list.

        :returns: the row, or None if nothing was found.
        :rtype: list(str) or None
        """
        return results.first(self.select_all(statement, limit=1))

    def select_row_dict(self, statement):
        """
        Sends a query and returns the first row as a dict by column key.

        :returns: the row, or None if nothing was found.
        :rtype: dict or None
        """
        return results.first(self.select_all(statement, slice=True, limit=1))

    def select_scalar_value(self, statement):
        """
        Sends a query and returns the first value of the first row::

            count = ls.select_scalar_value('GET hosts\\nStats: state = 0')

        :returns: the value, or None if nothing was found.
        :rtype: str or None
        """
        return results.first(self.select_row_list(statement))

    def errors_are_fatal(self, value):
        """
        Enables or disables fatal errors. When enabled every failure is raised,
        when disabled failed queries return None.

        :param value: True to raise errors.
        :type value: bool
        """
        self._get_client().set_errors_are_fatal(value)

    def get_last_error(self):
        """
        Returns the error of the last query, or None if it succeeded.

        :returns: the error.
        :rtype: ErrorInfo or None
        """
        return self._get_client().get_last_error()

    def get_error_code(self):
        """
        Returns the code of the error of the last query, None if it succeeded.

        :rtype: int or None
        """
        error = self.get_last_error()
        return None if error is None else error.get_code()

    def get_error_message(self):
        """
        Returns the message of the error of the last query, None if it
        succeeded.

        :rtype: str or None
        """
        error = self.get_last_error()
        return None if error is None else error.get_message()

    def get_client(self):
        # Internal use only.
        return self._client

    def close(self):
        """
        Close the Livestatus handle and the connection it keeps, if any.
        """
        if self._client is not None:
            self._client.shut_down()
            self._client = None

    def _get_client(self):
        if self._client is None:
            raise IllegalStateException('The handle has been closed.')
        return self._client

    def _get_logger(self, config):
        """
        Returns the logger used for the handle. If no logger is specified,
        create one based on this class name.
        """
        if config.get_logger() is None and config.is_default_logger():
            logger = getLogger(self.__class__.__name__)
            # A quiet handle leaves the level set by a verbose one.
            if config.get_verbose():
                logger.setLevel(DEBUG)
            elif logger.level == NOTSET:
                logger.setLevel(WARNING)
            if not logger.handlers:
                handler = StreamHandler()
                formatter = Formatter('%(asctime)s [%(levelname)s] %(message)s')
                handler.setFormatter(formatter)
                logger.addHandler(handler)
        else:
            logger = config.get_logger()
        return logger
