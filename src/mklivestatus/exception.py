#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#


class IllegalArgumentException(RuntimeError):
    """
    Exception class that is used when an invalid argument was passed, this could
    mean that the type is not the expected or the value is not valid for the
    specific case.
    """

    def __init__(self, message=None, cause=None):
        self._message = message
        self._cause = cause

    def __str__(self):
        return self._message

    def get_cause(self):
        """
        Get the cause of the exception.

        :returns: the cause of the exception.
        :rtype: RuntimeError
        """
        return self._cause


class IllegalStateException(RuntimeError):
    """
    Exception that is thrown when a method has been invoked at an illegal or
    inappropriate time, for example on a handle that has been closed.
    """

    def __init__(self, message=None, cause=None):
        self._message = message
        self._cause = cause

    def __str__(self):
        return self._message

    def get_cause(self):
        """
        Get the cause of the exception.

        :returns: the cause of the exception.
        :rtype: RuntimeError
        """
        return self._cause


class LivestatusException(RuntimeError):
    """
    A base class for the exceptions thrown while talking to a livestatus
    backend. Every instance carries a numeric code. Codes below 491 are
    reported by the backend in the response header, codes from 491 on are
    detected by the client itself.

    The message returned by :py:meth:`get_message` is the one recorded as the
    last error of the handle. When the exception is raised for a statement,
    ``str()`` also names the statement.
    """

    def __init__(self, message, code, cause=None):
        self._message = message
        self._code = code
        self._cause = cause
        self._statement = None

    def __str__(self):
        if self._statement is None:
            return 'ERROR ' + str(self._code) + ' - ' + self._message
        return ('ERROR ' + str(self._code) + ' - ' + self._message +
                '\nin query:\n' + self._statement)

    def get_cause(self):
        """
        Get the cause of the exception.

        :returns: the cause of the exception.
        :rtype: Exception
        """
        return self._cause

    def get_code(self):
        """
        Returns the numeric error code.

        :returns: the error code.
        :rtype: int
        """
        return self._code

    def get_message(self):
        """
        Returns the error message without the statement.

        :returns: the message.
        :rtype: str
        """
        return self._message

    def get_statement(self):
        """
        Returns the statement that failed, or None if the failure happened
        outside of a query.

        :returns: the statement.
        :rtype: str or None
        """
        return self._statement

    def set_statement(self, statement):
        # Internal use only.
        self._statement = statement
        return self

    def is_connection_error(self):
        """
        Returns whether the exception means the connection it happened on can
        no longer be used.
        """
        return False


class LocalException(LivestatusException):
    """
    Base class for failures detected by the client, before or during I/O.
    Nothing about these reaches the backend.
    """

    def __init__(self, message, code, cause=None):
        super(LocalException, self).__init__(message, code, cause)


class ReservedHeaderException(LocalException):
    """
    The statement contains a header line the client emits itself, such as
    ``Separators:`` or ``KeepAlive:``. Use the matching configuration option
    instead.
    """

    def __init__(self, message, code, header):
        super(ReservedHeaderException, self).__init__(message, code)
        self._header = header

    def get_header(self):
        """
        Returns the reserved header prefix found in the statement.

        :returns: the header, for example 'Separators:'.
        :rtype: str
        """
        return self._header


class ConnectException(LocalException):
    """
    The connection to the backend could not be opened.
    """

    CODE = 491

    def __init__(self, message, cause=None):
        super(ConnectException, self).__init__(
            message, ConnectException.CODE, cause)

    def is_connection_error(self):
        return True


class NoHeaderException(LocalException):
    """
    The connection was closed before any byte of the response header arrived.
    """

    CODE = 497

    def __init__(self, message='got no header'):
        super(NoHeaderException, self).__init__(
            message, NoHeaderException.CODE)

    def is_connection_error(self):
        return True


class ShortHeaderException(LocalException):
    """
    The connection was closed after some, but fewer than 16, bytes of the
    response header arrived.
    """

    CODE = 498

    def __init__(self, message='header is not exactly 16byte long'):
        super(ShortHeaderException, self).__init__(
            message, ShortHeaderException.CODE)

    def is_connection_error(self):
        return True


class MalformedHeaderException(LocalException):
    """
    All 16 bytes of the response header arrived but its status code or
    content length field could not be parsed.
    """

    CODE = 499

    def __init__(self, message='failed to get content-length from header'):
        super(MalformedHeaderException, self).__init__(
            message, MalformedHeaderException.CODE)

    def is_connection_error(self):
        # The body was left unread, the stream is out of step.
        return True


class SocketException(LocalException):
    """
    A socket level error happened while writing the request or reading the
    response.
    """

    CODE = 500

    def __init__(self, message, cause=None):
        super(SocketException, self).__init__(
            message, SocketException.CODE, cause)

    def is_connection_error(self):
        return True


class RemoteException(LivestatusException):
    """
    The backend answered with a status other than 200. The message is the
    description of the status followed by the diagnostic text the backend put
    in the response body.
    """

    def __init__(self, message, code):
        super(RemoteException, self).__init__(message, code)


class InvalidHeaderException(RemoteException):
    """
    Status 401, the request contains an invalid header.
    """

    def __init__(self, message):
        super(InvalidHeaderException, self).__init__(message, 401)


class InvalidRequestException(RemoteException):
    """
    Status 402, the request is completely invalid.
    """

    def __init__(self, message):
        super(InvalidRequestException, self).__init__(message, 402)


class IncompleteRequestException(RemoteException):
    """
    Status 403, the request is incomplete.
    """

    def __init__(self, message):
        super(IncompleteRequestException, self).__init__(message, 403)


class NotFoundException(RemoteException):
    """
    Status 404, the target of the GET, for example the table, does not exist.
    """

    def __init__(self, message):
        super(NotFoundException, self).__init__(message, 404)


class UnknownColumnException(RemoteException):
    """
    Status 405, the statement refers to a column that does not exist.
    """

    def __init__(self, message):
        super(UnknownColumnException, self).__init__(message, 405)


class KeyFieldNotFoundException(RuntimeError):
    """
    Thrown by :py:meth:`Livestatus.select_all_dict` when a row of the result
    has no value for the requested key field. This points to a mismatch
    between the statement and the key field, so it is raised whether or not
    errors are fatal.
    """

    def __init__(self, key_field, possible_keys):
        self._key_field = key_field
        self._possible_keys = sorted(possible_keys)

    def __str__(self):
        return ('key ' + str(self._key_field) + ' not found in result set, ' +
                'possible keys are: ' + ', '.join(self._possible_keys))

    def get_key_field(self):
        """
        Returns the key field that was not found.

        :returns: the key field.
        :rtype: str
        """
        return self._key_field

    def get_possible_keys(self):
        """
        Returns the sorted field names present on the offending row.

        :returns: the field names.
        :rtype: list(str)
        """
        return self._possible_keys
