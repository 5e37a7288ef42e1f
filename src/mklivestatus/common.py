#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from logging import Logger
from time import ctime

from .exception import IllegalArgumentException


class CheckValue:
    @staticmethod
    def check_boolean(data, name):
        if data is not True and data is not False:
            raise IllegalArgumentException(name + ' must be True or False.')

    @staticmethod
    def check_byte(data, name):
        if not CheckValue.is_int(data) or not 0 <= data <= 255:
            raise IllegalArgumentException(
                name + ' must be an integer between 0 and 255. Got:' +
                str(data))

    @staticmethod
    def check_int_ge_zero(data, name):
        if not CheckValue.is_int(data) or data < 0:
            raise IllegalArgumentException(
                name + ' must be an integer that is not negative. Got:' +
                str(data))

    @staticmethod
    def check_list(data, name):
        if not isinstance(data, list):
            raise IllegalArgumentException(name + ' must be a list.')

    @staticmethod
    def check_str(data, name):
        if not CheckValue.is_str(data):
            raise IllegalArgumentException(name + ' must be a string type.')

    @staticmethod
    def check_logger(data, name):
        if data is not None and not isinstance(data, Logger):
            raise IllegalArgumentException(name + ' must be a Logger.')

    @staticmethod
    def check_timeout(data, name):
        if data is not None and (
                not isinstance(data, (int, float)) or
                isinstance(data, bool) or data <= 0):
            raise IllegalArgumentException(
                name + ' must be None or a positive number. Got:' + str(data))

    @staticmethod
    def is_int(data):
        return (isinstance(data, int) and not isinstance(data, bool) and
                -pow(2, 63) <= data < pow(2, 63))

    @staticmethod
    def is_str(data):
        return isinstance(data, str)


class LogUtils:
    # Utility methods to facilitate Logging.
    def __init__(self, logger=None):
        self.__logger = logger

    def log_error(self, msg):
        if self.__logger is not None:
            self.__logger.error(ctime() + '[ERROR]' + msg)

    def log_warning(self, msg):
        if self.__logger is not None:
            self.__logger.warning(ctime() + '[WARNING]' + msg)

    def log_debug(self, msg):
        if self.__logger is not None:
            self.__logger.debug(ctime() + '[DEBUG]' + msg)

    def is_enabled_for(self, level):
        return self.__logger is not None and self.__logger.isEnabledFor(level)


class SeparatorSet(object):
    """
    The four byte values the backend uses to delimit its output. They are sent
    with every query in the ``Separators:`` header.

    Only the line and column separators are used by the client to split the
    response body. The list and host/service separators show up inside single
    field values, for example in the ``members`` column of a hostgroup, and
    are left for the application to split.

    :param line: separates rows, defaults to 10 (newline).
    :type line: int
    :param column: separates fields of a row, defaults to 0 (null byte).
    :type column: int
    :param list_sep: separates the elements of list valued fields, defaults
        to 44 (comma).
    :type list_sep: int
    :param host_service: separates host and service in composite values,
        defaults to 124 (pipe).
    :type host_service: int
    :raises IllegalArgumentException: raises the exception if a value is not
        an integer between 0 and 255.
    """

    DEFAULT_LINE = 10
    DEFAULT_COLUMN = 0
    DEFAULT_LIST = 44
    DEFAULT_HOST_SERVICE = 124

    def __init__(self, line=DEFAULT_LINE, column=DEFAULT_COLUMN,
                 list_sep=DEFAULT_LIST, host_service=DEFAULT_HOST_SERVICE):
        CheckValue.check_byte(line, 'line_separator')
        CheckValue.check_byte(column, 'column_separator')
        CheckValue.check_byte(list_sep, 'list_separator')
        CheckValue.check_byte(host_service, 'host_service_separator')
        self._line = line
        self._column = column
        self._list = list_sep
        self._host_service = host_service

    def __eq__(self, other):
        if not isinstance(other, SeparatorSet):
            return False
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __str__(self):
        return ' '.join(str(value) for value in self.as_tuple())

    def as_tuple(self):
        return self._line, self._column, self._list, self._host_service

    def get_line(self):
        """
        Returns the line separator byte value.

        :returns: the line separator.
        :rtype: int
        """
        return self._line

    def get_column(self):
        """
        Returns the column separator byte value.

        :returns: the column separator.
        :rtype: int
        """
        return self._column

    def get_list(self):
        """
        Returns the list separator byte value.

        :returns: the list separator.
        :rtype: int
        """
        return self._list

    def get_host_service(self):
        """
        Returns the host/service separator byte value.

        :returns: the host/service separator.
        :rtype: int
        """
        return self._host_service


class ResponseHeader(object):
    # The parsed fixed16 response header: a status code and the length of the
    # body that follows it.

    def __init__(self, status, content_length):
        self._status = status
        self._content_length = content_length

    def __str__(self):
        return ('{status=' + str(self._status) + ', content_length=' +
                str(self._content_length) + '}')

    def get_status(self):
        return self._status

    def get_content_length(self):
        return self._content_length

    def is_ok(self):
        return self._status == 200


class QueryResult(object):
    """
    The decoded answer to a statement: the column keys and the data rows.

    Keys are None when the backend sent nothing to take them from, which is
    always the case for ``COMMAND`` statements. Rows are lists of strings.
    Rows are not guaranteed to have as many fields as there are keys.
    """

    def __init__(self, keys=None, rows=None, status=200):
        self._keys = keys
        self._rows = [] if rows is None else rows
        self._status = status

    def __str__(self):
        return ('QueryResult: [keys=' + str(self._keys) + ', rows=' +
                str(len(self._rows)) + ']')

    def get_keys(self):
        """
        Returns the column keys, or None if there are none.

        :returns: the keys.
        :rtype: list(str) or None
        """
        return self._keys

    def get_rows(self):
        """
        Returns the data rows.

        :returns: the rows.
        :rtype: list(list(str))
        """
        return self._rows

    def get_status(self):
        """
        Returns the status code of the response, 200 for success.

        :returns: the status code.
        :rtype: int
        """
        return self._status


class ErrorInfo(object):
    """
    The code and message of the most recent failure of a handle.

    :param code: the error code.
    :type code: int
    :param message: the error message.
    :type message: str
    """

    def __init__(self, code, message):
        self._code = code
        self._message = message

    def __eq__(self, other):
        return (isinstance(other, ErrorInfo) and self._code == other._code and
                self._message == other._message)

    def __str__(self):
        return str(self._code) + ': ' + self._message

    def get_code(self):
        return self._code

    def get_message(self):
        return self._message
