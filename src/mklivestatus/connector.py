#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from abc import ABCMeta, abstractmethod
from os import stat
from socket import (
    AF_UNIX, MSG_PEEK, SOCK_STREAM, create_connection, error, socket)
from stat import S_ISSOCK

from .common import CheckValue, LogUtils
from .config import LivestatusConfig
from .exception import ConnectException


class Connector(metaclass=ABCMeta):
    """
    A Connector opens and closes the sockets a handle talks to the backend
    over. It keeps no state beyond its address. Connect failures are reported
    once as :py:class:`ConnectException`, there are no retries.

    :param timeout: timeout in seconds for connect and for blocking socket
        operations, None to block.
    :type timeout: int or float or None
    :param logger: the logger, None to disable logging.
    :type logger: Logger
    """

    def __init__(self, timeout=None, logger=None):
        CheckValue.check_timeout(timeout, 'timeout')
        self._timeout = timeout
        self._logutils = LogUtils(logger)
        self._errors_are_fatal = True

    @abstractmethod
    def get_address(self):
        """
        Returns a printable form of the address the connector connects to.

        :returns: the address.
        :rtype: str
        """
        pass

    @abstractmethod
    def _connect(self):
        # Returns a connected socket, raises socket.error on failure.
        pass

    def open(self):
        """
        Opens a new connection.

        :returns: the connected socket.
        :rtype: socket
        :raises ConnectException: raises the exception if the connection could
            not be opened.
        """
        try:
            sock = self._connect()
        except ConnectException as ce:
            self._log_failure(ce.get_message())
            raise ce
        except error as e:
            msg = 'failed to connect to ' + self.get_address() + ' :' + str(e)
            self._log_failure(msg)
            raise ConnectException(msg, e)
        self._logutils.log_debug('Connected to ' + self.get_address())
        return sock

    def close(self, sock):
        """
        Closes the socket.

        :param sock: the socket returned by :py:meth:`open`.
        :type sock: socket
        """
        if sock is not None:
            sock.close()

    @staticmethod
    def is_connected(sock):
        """
        Returns whether a socket opened earlier is still usable. The check
        does not block: a socket whose peer has closed the connection, or that
        was closed locally, is reported as not connected.

        :param sock: the socket.
        :type sock: socket
        :returns: True if the socket is connected.
        :rtype: bool
        """
        if sock is None or sock.fileno() == -1:
            return False
        timeout = sock.gettimeout()
        try:
            sock.getpeername()
            sock.setblocking(False)
            data = sock.recv(1, MSG_PEEK)
        except BlockingIOError:
            return True
        except error:
            return False
        finally:
            if sock.fileno() != -1:
                sock.settimeout(timeout)
        # Readable with no data means the peer closed the connection.
        return len(data) > 0

    def set_errors_are_fatal(self, errors_are_fatal):
        """
        Internal use only.

        Kept in sync with the handle. A failed connect is logged as an error
        when errors are fatal and as a warning otherwise.
        """
        CheckValue.check_boolean(errors_are_fatal, 'errors_are_fatal')
        self._errors_are_fatal = errors_are_fatal
        return self

    def get_errors_are_fatal(self):
        return self._errors_are_fatal

    def get_timeout(self):
        return self._timeout

    def _log_failure(self, msg):
        if self._errors_are_fatal:
            self._logutils.log_error(msg)
        else:
            self._logutils.log_warning(msg)


class UnixConnector(Connector):
    """
    Connects to livestatus through a UNIX domain socket.

    :param path: the path of the socket, for example
        /var/lib/nagios3/rw/livestatus.sock.
    :type path: str
    :param timeout: timeout in seconds, None to block.
    :type timeout: int or float or None
    :param logger: the logger, None to disable logging.
    :type logger: Logger
    :raises IllegalArgumentException: raises the exception if path is not a
        string.
    """

    def __init__(self, path, timeout=None, logger=None):
        super(UnixConnector, self).__init__(timeout, logger)
        CheckValue.check_str(path, 'path')
        self._path = path

    def get_address(self):
        return self._path

    def _connect(self):
        try:
            mode = stat(self._path).st_mode
        except error as e:
            raise ConnectException(
                'failed to open socket ' + self._path + ': ' + str(e), e)
        if not S_ISSOCK(mode):
            raise ConnectException(
                'failed to open socket ' + self._path + ': not a socket')
        sock = socket(AF_UNIX, SOCK_STREAM)
        sock.settimeout(self._timeout)
        try:
            sock.connect(self._path)
        except error:
            sock.close()
            raise
        return sock


class InetConnector(Connector):
    """
    Connects to livestatus through TCP, for example to an xinetd or
    livestatus proxy listener.

    :param server: the server in the form host:port.
    :type server: str
    :param timeout: timeout in seconds, None to block.
    :type timeout: int or float or None
    :param logger: the logger, None to disable logging.
    :type logger: Logger
    :raises IllegalArgumentException: raises the exception if server is not a
        string of the form host:port.
    """

    def __init__(self, server, timeout=None, logger=None):
        super(InetConnector, self).__init__(timeout, logger)
        CheckValue.check_str(server, 'server')
        self._server = server
        self._host, self._port = LivestatusConfig.split_server(server)

    def get_address(self):
        return self._server

    def get_host(self):
        return self._host

    def get_port(self):
        return self._port

    def _connect(self):
        return create_connection((self._host, self._port), self._timeout)
