#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from re import MULTILINE, compile
from socket import SHUT_WR, error

from .common import QueryResult, ResponseHeader
from .exception import (
    IncompleteRequestException, InvalidHeaderException,
    InvalidRequestException, MalformedHeaderException, NoHeaderException,
    NotFoundException, RemoteException, ReservedHeaderException,
    ShortHeaderException, SocketException, UnknownColumnException)


class Protocol(object):
    """
    Encoding of livestatus requests and decoding of fixed16 responses.

    A request is the statement followed by header lines the client controls.
    A response starts with a 16 byte header, for example
    ``'200          1234\\n'``, holding the status code in its first three
    bytes and the length of the body from byte 5 on.
    """

    HEADER_SIZE = 16
    READ_CHUNK_SIZE = 65536
    CONTENT_LENGTH_OFFSET = 5
    STATUS_OK = 200
    ENCODING = 'utf-8'

    COMMAND_PREFIX = 'COMMAND'

    # Header lines the client emits itself. Checked in this order, the first
    # match decides the error code.
    RESERVED_HEADERS = (
        ('Separators:', 492,
         'Separators not allowed in statement. Please use the separator ' +
         'options of the config'),
        ('KeepAlive:', 496,
         'Keepalive not allowed in statement. Please use the keepalive ' +
         'option of the config'),
        ('ResponseHeader:', 495,
         'ResponseHeader not allowed in statement. Header will be set ' +
         'automatically'),
        ('ColumnHeaders:', 494,
         'ColumnHeaders not allowed in statement. Header will be set ' +
         'automatically'),
        ('OutputFormat:', 493,
         'OutputFormat not allowed in statement. Header will be set ' +
         'automatically'))

    STATUS_MESSAGES = {
        200: 'OK. Response contains the queried data.',
        401: 'The request contains an invalid header.',
        402: 'The request is completely invalid.',
        403: 'The request is incomplete.',
        404: 'The target of the GET has not been found (e.g. the table).',
        405: 'A non-existing column was being referred to'}
    UNKNOWN_STATUS_MESSAGE = 'Unknown error.'

    _COLUMNS = compile(r'^Columns: (.*)$', MULTILINE)
    _STATS = compile(r'^Stats: (.*)$', MULTILINE)
    _CONTENT_LENGTH = compile(r'^\s*(\d+)\s*$')

    @staticmethod
    def check_statement(statement):
        """
        Rejects statements that contain a reserved header line.

        :param statement: the statement.
        :type statement: str
        :raises ReservedHeaderException: raises the exception if a line of the
            statement starts with a reserved header.
        """
        lines = statement.split('\n')
        for header, code, message in Protocol.RESERVED_HEADERS:
            for line in lines:
                if line.startswith(header):
                    raise ReservedHeaderException(message, code, header)

    @staticmethod
    def is_command(statement):
        # COMMAND statements change the monitoring core and are never answered.
        return statement.startswith(Protocol.COMMAND_PREFIX)

    @staticmethod
    def build_request(statement, separators, keepalive=False):
        """
        Frames a statement into the bytes sent to the backend.

        :param statement: the statement, already checked and without its
            trailing newline.
        :type statement: str
        :param separators: the separators to request.
        :type separators: SeparatorSet
        :param keepalive: whether to ask the backend to keep the connection.
        :type keepalive: bool
        :returns: the request.
        :rtype: bytes
        """
        header = ''
        if not Protocol.is_command(statement):
            header += 'Separators: ' + str(separators) + '\n'
            header += 'ResponseHeader: fixed16\n'
        if keepalive:
            header += 'KeepAlive: on\n'
        return (statement + '\n' + header).encode(Protocol.ENCODING)

    @staticmethod
    def send_request(sock, request, keepalive=False):
        """
        Writes a request. Without keepalive the write side of the socket is
        shut down afterwards, which ends the request. With keepalive a blank
        line ends it and the socket stays usable.

        :raises SocketException: raises the exception if writing fails.
        """
        try:
            sock.sendall(request)
            if keepalive:
                sock.sendall(b'\n')
            else:
                sock.shutdown(SHUT_WR)
        except error as e:
            raise SocketException(
                'writing request to socket failed: ' + str(e), e)

    @staticmethod
    def read_fully(sock, length):
        # Reads until length bytes arrived or the peer closed the connection.
        chunks = []
        remaining = length
        while remaining > 0:
            chunk = sock.recv(min(remaining, Protocol.READ_CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b''.join(chunks)

    @staticmethod
    def read_header(sock):
        """
        Reads and parses the 16 byte response header.

        :returns: the header.
        :rtype: ResponseHeader
        :raises NoHeaderException: raises the exception if the connection was
            closed before any byte arrived.
        :raises ShortHeaderException: raises the exception if fewer than 16
            bytes arrived.
        :raises MalformedHeaderException: raises the exception if the header
            cannot be parsed.
        :raises SocketException: raises the exception if reading fails.
        """
        try:
            data = Protocol.read_fully(sock, Protocol.HEADER_SIZE)
        except error as e:
            raise SocketException(
                'reading header from socket failed: ' + str(e), e)
        return Protocol.parse_header(data)

    @staticmethod
    def parse_header(data):
        """
        Parses a response header. The length is checked before anything
        else. The bytes between the status code and the content length field
        are not looked at.

        :param data: the raw header.
        :type data: bytes
        :returns: the header.
        :rtype: ResponseHeader
        """
        if not data:
            raise NoHeaderException()
        if len(data) != Protocol.HEADER_SIZE:
            raise ShortHeaderException()
        header = data.decode('ascii', 'replace')
        if header.endswith('\n'):
            header = header[:-1]
        match = Protocol._CONTENT_LENGTH.match(
            header[Protocol.CONTENT_LENGTH_OFFSET:])
        if match is None:
            raise MalformedHeaderException()
        status = header[:3]
        if not status.isdigit():
            raise MalformedHeaderException(
                'failed to get status code from header')
        return ResponseHeader(int(status), int(match.group(1)))

    @staticmethod
    def read_body(sock, content_length):
        """
        Reads exactly content_length bytes of response body.

        :returns: the body, or None if content_length is 0.
        :rtype: bytes or None
        :raises SocketException: raises the exception if the connection fails
            or is closed before the whole body arrived.
        """
        if content_length == 0:
            return None
        try:
            body = Protocol.read_fully(sock, content_length)
        except error as e:
            raise SocketException(
                'reading body from socket failed: ' + str(e), e)
        if len(body) != content_length:
            raise SocketException(
                'reading body from socket failed: got ' + str(len(body)) +
                ' of ' + str(content_length) + ' bytes')
        return body

    @staticmethod
    def map_exception(status, body=None):
        """
        Maps a status other than 200 into the matching exception. The body of
        an error response is diagnostic text and is appended to the message.

        :param status: the status code from the header.
        :type status: int
        :param body: the response body.
        :type body: bytes or None
        :returns: the exception.
        :rtype: RemoteException
        """
        text = '' if body is None else body.decode(Protocol.ENCODING,
                                                   'replace')
        if text.endswith('\n'):
            text = text[:-1]
        msg = Protocol.STATUS_MESSAGES.get(
            status, Protocol.UNKNOWN_STATUS_MESSAGE) + '\n' + text
        if status == 401:
            return InvalidHeaderException(msg)
        elif status == 402:
            return InvalidRequestException(msg)
        elif status == 403:
            return IncompleteRequestException(msg)
        elif status == 404:
            return NotFoundException(msg)
        elif status == 405:
            return UnknownColumnException(msg)
        return RemoteException(msg, status)

    @staticmethod
    def split_rows(body, separators):
        """
        Splits a body into rows of string fields. Empty fields between two
        column separators are kept, trailing empty lines are dropped.

        :param body: the response body.
        :type body: bytes
        :param separators: the separators the body was produced with.
        :type separators: SeparatorSet
        :returns: the rows.
        :rtype: list(list(str))
        """
        line_sep = bytes((separators.get_line(),))
        column_sep = bytes((separators.get_column(),))
        lines = body.split(line_sep)
        while lines and not lines[-1]:
            lines.pop()
        rows = []
        for line in lines:
            if not line:
                rows.append([])
                continue
            rows.append([field.decode(Protocol.ENCODING, 'replace')
                         for field in line.split(column_sep)])
        return rows

    @staticmethod
    def get_keys(statement):
        """
        Returns the column keys implied by the statement, or None if the
        backend sends them as the first row. A ``Columns:`` line wins over
        ``Stats:`` lines.

        :param statement: the statement the response belongs to.
        :type statement: str
        :returns: the keys or None.
        :rtype: list(str) or None
        """
        match = Protocol._COLUMNS.search(statement)
        if match is not None:
            return match.group(1).split()
        stats = Protocol._STATS.findall(statement)
        if stats:
            return stats
        return None

    @staticmethod
    def decode_body(body, statement, separators):
        """
        Decodes a response body into a :py:class:`QueryResult`.

        :param body: the response body, None if the response had none.
        :type body: bytes or None
        :param statement: the statement the response belongs to.
        :type statement: str
        :param separators: the separators the body was produced with.
        :type separators: SeparatorSet
        :returns: the result.
        :rtype: QueryResult
        """
        if body is None:
            return QueryResult()
        rows = Protocol.split_rows(body, separators)
        keys = Protocol.get_keys(statement)
        if keys is None and rows:
            keys = rows.pop(0)
        return QueryResult(keys, rows)
