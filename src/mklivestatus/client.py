#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from logging import DEBUG
from socket import error

from .common import CheckValue, ErrorInfo, LogUtils, QueryResult
from .connector import InetConnector, UnixConnector
from .exception import (
    ConnectException, IllegalArgumentException, IllegalStateException,
    LivestatusException, SocketException)
from .protocol import Protocol


class Client(object):
    # The socket driver client. Owns the connector, the socket cached in
    # keepalive mode and the last error. One request at a time.

    def __init__(self, config, logger):
        self._logutils = LogUtils(logger)
        self._separators = config.get_separators()
        self._keepalive = config.get_keepalive()
        self._verbose = config.get_verbose()
        self._errors_are_fatal = config.get_errors_are_fatal()
        if config.get_socket() is not None:
            self._connector = UnixConnector(
                config.get_socket(), config.get_timeout(), logger)
        else:
            self._connector = InetConnector(
                config.get_server(), config.get_timeout(), logger)
        self._connector.set_errors_are_fatal(self._errors_are_fatal)
        self._sock = None
        self._last_error = None
        self._shut_down = False

    def execute(self, statement):
        """
        Sends a statement and returns its decoded result.

        When errors are fatal any failure is raised. Otherwise the failure is
        recorded as last error and None is returned.
        """
        if statement is None:
            raise IllegalArgumentException('no statement')
        CheckValue.check_str(statement, 'statement')
        if self._shut_down:
            raise IllegalStateException('The handle has been closed.')
        self._last_error = None
        if statement.endswith('\n'):
            statement = statement[:-1]
        try:
            return self._execute(statement)
        except LivestatusException as le:
            le.set_statement(statement)
            self._last_error = ErrorInfo(le.get_code(), le.get_message())
            if le.is_connection_error():
                self._drop_cached_socket()
            # The connector logs connect failures itself.
            logged = isinstance(le, ConnectException)
            if self._errors_are_fatal:
                if not logged:
                    self._logutils.log_error(str(le))
                raise le
            if not logged:
                self._logutils.log_warning(str(le))
            return None

    def open(self):
        """
        Returns the cached socket if keepalive is enabled and it is still
        connected, otherwise a new one. In keepalive mode a new socket is
        cached for the following requests.
        """
        if self._keepalive and self._connector.is_connected(self._sock):
            return self._sock
        self._drop_cached_socket()
        sock = self._connector.open()
        if self._keepalive:
            self._sock = sock
        return sock

    def close(self, sock):
        # In keepalive mode the socket stays open for the next request.
        if not self._keepalive:
            self._connector.close(sock)

    def set_errors_are_fatal(self, errors_are_fatal):
        CheckValue.check_boolean(errors_are_fatal, 'errors_are_fatal')
        self._errors_are_fatal = errors_are_fatal
        self._connector.set_errors_are_fatal(errors_are_fatal)

    def get_errors_are_fatal(self):
        return self._errors_are_fatal

    def get_connector(self):
        return self._connector

    def get_last_error(self):
        return self._last_error

    def get_separators(self):
        return self._separators

    def shut_down(self):
        # Release the cached socket, if any.
        self._drop_cached_socket()
        self._shut_down = True

    def _execute(self, statement):
        Protocol.check_statement(statement)
        request = Protocol.build_request(
            statement, self._separators, self._keepalive)
        if self._verbose:
            self._logutils.log_debug('> ' + repr(request))
        sock = self.open()
        try:
            Protocol.send_request(sock, request, self._keepalive)
            if Protocol.is_command(statement):
                self._logutils.log_debug('COMMANDs never return something')
                return QueryResult()
            header = Protocol.read_header(sock)
            body = Protocol.read_body(sock, header.get_content_length())
        except error as e:
            raise SocketException('socket error: ' + str(e), e)
        finally:
            self.close(sock)
        if self._verbose:
            self._logutils.log_debug('status: ' + str(header.get_status()))
            self._logutils.log_debug('< ' + repr(body))
        if not header.is_ok():
            raise Protocol.map_exception(header.get_status(), body)
        result = Protocol.decode_body(body, statement, self._separators)
        if self._logutils.is_enabled_for(DEBUG):
            self._logutils.log_debug(str(result))
        return result

    def _drop_cached_socket(self):
        if self._sock is not None:
            sock = self._sock
            self._sock = None
            self._connector.close(sock)
