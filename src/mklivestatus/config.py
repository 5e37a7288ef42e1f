#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from copy import deepcopy

from .common import CheckValue, SeparatorSet
from .exception import IllegalArgumentException


# noinspection PyPep8
class LivestatusConfig(object):
    """
    An instance of this class is required by :py:class:`Livestatus`.

    LivestatusConfig groups the parameters used to configure a
    :py:class:`Livestatus` handle. When creating a handle the config instance
    is copied, so modifying it afterwards has no effect on existing handles.

    Exactly one transport must be given: either the path of the livestatus
    UNIX socket, or a TCP server in the form ``host:port``. For example:

     * /var/lib/nagios3/rw/livestatus.sock
     * localhost:6557

    :param socket: path to the UNIX socket of livestatus.
    :type socket: str
    :param server: host and port of a livestatus TCP listener.
    :type server: str
    :raises IllegalArgumentException: raises the exception if both or neither
        of socket and server are given, or if server is malformed.
    """

    # The keyword options accepted by from_options.
    OPTIONS = ('socket', 'server', 'verbose', 'line_separator',
               'column_separator', 'list_separator', 'host_service_separator',
               'keepalive', 'errors_are_fatal')

    def __init__(self, socket=None, server=None):
        if socket is not None and server is not None:
            raise IllegalArgumentException(
                'Use either socket or server, not both at once.')
        if socket is None and server is None:
            raise IllegalArgumentException(
                'Please specify either socket or a server.')
        if socket is not None:
            CheckValue.check_str(socket, 'socket')
        else:
            CheckValue.check_str(server, 'server')
            LivestatusConfig.split_server(server)
        self._socket = socket
        self._server = server
        self._verbose = False
        self._separators = SeparatorSet()
        self._keepalive = False
        self._errors_are_fatal = True
        self._timeout = None
        self._logger = None
        self._is_default_logger = True

    @staticmethod
    def from_options(**options):
        """
        Creates a config from keyword options. The recognized options are
        socket, server, verbose, line_separator, column_separator,
        list_separator, host_service_separator, keepalive and
        errors_are_fatal. Separators are ascii codes.

        :returns: the config.
        :rtype: LivestatusConfig
        :raises IllegalArgumentException: raises the exception if an option is
            unknown or has an invalid value.
        """
        for key in options:
            if key not in LivestatusConfig.OPTIONS:
                raise IllegalArgumentException('unknown option: ' + key)
        config = LivestatusConfig(options.get('socket'), options.get('server'))
        config.set_separators(SeparatorSet(
            options.get('line_separator', SeparatorSet.DEFAULT_LINE),
            options.get('column_separator', SeparatorSet.DEFAULT_COLUMN),
            options.get('list_separator', SeparatorSet.DEFAULT_LIST),
            options.get('host_service_separator',
                        SeparatorSet.DEFAULT_HOST_SERVICE)))
        if 'verbose' in options:
            config.set_verbose(bool(options['verbose']))
        if 'keepalive' in options:
            config.set_keepalive(bool(options['keepalive']))
        if 'errors_are_fatal' in options:
            config.set_errors_are_fatal(bool(options['errors_are_fatal']))
        return config

    def get_socket(self):
        """
        Returns the path of the UNIX socket, or None if a TCP server is used.

        :returns: the socket path.
        :rtype: str or None
        """
        return self._socket

    def get_server(self):
        """
        Returns the TCP server as ``host:port``, or None if a UNIX socket is
        used.

        :returns: the server.
        :rtype: str or None
        """
        return self._server

    def set_verbose(self, verbose):
        """
        Enables verbose mode. In verbose mode the default logger is created at
        DEBUG level and every request, status and response body is logged.

        :param verbose: True to enable verbose mode.
        :type verbose: bool
        :returns: self.
        :raises IllegalArgumentException: raises the exception if verbose is
            not a boolean.
        """
        CheckValue.check_boolean(verbose, 'verbose')
        self._verbose = verbose
        return self

    def get_verbose(self):
        """
        Returns whether verbose mode is enabled.

        :returns: True if verbose mode is enabled.
        :rtype: bool
        """
        return self._verbose

    def set_separators(self, separators):
        """
        Sets the separators the backend uses in its output.

        :param separators: the separators.
        :type separators: SeparatorSet
        :returns: self.
        :raises IllegalArgumentException: raises the exception if separators is
            not an instance of :py:class:`SeparatorSet`.
        """
        if not isinstance(separators, SeparatorSet):
            raise IllegalArgumentException(
                'separators must be an instance of SeparatorSet.')
        self._separators = separators
        return self

    def get_separators(self):
        """
        Returns the separators, by default newline, null byte, comma and pipe.

        :returns: the separators.
        :rtype: SeparatorSet
        """
        return self._separators

    def set_keepalive(self, keepalive):
        """
        Enables keepalive. With keepalive one connection is kept open and used
        for all queries of the handle, instead of one connection per query.

        :param keepalive: True to enable keepalive.
        :type keepalive: bool
        :returns: self.
        :raises IllegalArgumentException: raises the exception if keepalive is
            not a boolean.
        """
        CheckValue.check_boolean(keepalive, 'keepalive')
        self._keepalive = keepalive
        return self

    def get_keepalive(self):
        """
        Returns whether keepalive is enabled, False by default.

        :returns: True if keepalive is enabled.
        :rtype: bool
        """
        return self._keepalive

    def set_errors_are_fatal(self, errors_are_fatal):
        """
        Sets whether errors are raised. When disabled failed queries return
        None and the error is available from
        :py:meth:`Livestatus.get_last_error`.

        :param errors_are_fatal: True to raise errors.
        :type errors_are_fatal: bool
        :returns: self.
        :raises IllegalArgumentException: raises the exception if
            errors_are_fatal is not a boolean.
        """
        CheckValue.check_boolean(errors_are_fatal, 'errors_are_fatal')
        self._errors_are_fatal = errors_are_fatal
        return self

    def get_errors_are_fatal(self):
        """
        Returns whether errors are raised, True by default.

        :returns: True if errors are raised.
        :rtype: bool
        """
        return self._errors_are_fatal

    def set_timeout(self, timeout):
        """
        Sets a timeout, in seconds, for connecting and for every blocking
        socket operation. By default sockets block for as long as the
        operating system allows.

        :param timeout: the timeout in seconds, or None to block.
        :type timeout: int or float or None
        :returns: self.
        :raises IllegalArgumentException: raises the exception if timeout is
            not a positive number.
        """
        CheckValue.check_timeout(timeout, 'timeout')
        self._timeout = timeout
        return self

    def get_timeout(self):
        """
        Returns the socket timeout in seconds, None if not set.

        :returns: the timeout.
        :rtype: int or float or None
        """
        return self._timeout

    def set_logger(self, logger):
        """
        Sets the logger used for the handle.

        :param logger: the logger or None, None means disable logging.
        :type logger: Logger
        :returns: self.
        :raises IllegalArgumentException: raises the exception if logger is not
            an instance of Logger.
        """
        CheckValue.check_logger(logger, 'logger')
        self._logger = logger
        self._is_default_logger = False
        return self

    def get_logger(self):
        """
        Returns the logger, or None if not configured by user.

        :returns: the logger.
        :rtype: Logger
        """
        return self._logger

    def is_default_logger(self):
        # Internal use only
        return self._is_default_logger

    def clone(self):
        """
        All the configurations will be copied.

        :returns: the copy of the instance.
        :rtype: LivestatusConfig
        """
        logger = self._logger
        is_default_logger = self._is_default_logger
        self._logger = None
        clone_config = deepcopy(self)
        self._logger = logger
        clone_config._logger = logger
        clone_config._is_default_logger = is_default_logger
        return clone_config

    @staticmethod
    def split_server(server):
        # Splits a server of the form host:port. The host may be an IPv6
        # address in brackets.
        host, sep, portstring = server.rpartition(':')
        if not sep or not host:
            raise IllegalArgumentException(
                'Invalid server, expected host:port: ' + server)
        if host.startswith('[') and host.endswith(']'):
            host = host[1:-1]
        return host, LivestatusConfig.validate_port(server, portstring)

    @staticmethod
    def validate_port(server, portstring):
        # Check that a port is a valid, non negative integer.
        try:
            port = int(portstring)
        except ValueError:
            raise IllegalArgumentException(
                'Invalid port value for : ' + server)
        if not 0 < port < 65536:
            raise IllegalArgumentException(
                'Invalid port value for : ' + server)
        return port
