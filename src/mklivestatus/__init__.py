#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

from .common import ErrorInfo, QueryResult, ResponseHeader, SeparatorSet
from .config import LivestatusConfig
from .connector import Connector, InetConnector, UnixConnector
from .driver import Livestatus
from .exception import (
    ConnectException, IllegalArgumentException, IllegalStateException,
    IncompleteRequestException, InvalidHeaderException,
    InvalidRequestException, KeyFieldNotFoundException, LivestatusException,
    LocalException, MalformedHeaderException, NoHeaderException,
    NotFoundException, RemoteException, ReservedHeaderException,
    ShortHeaderException, SocketException, UnknownColumnException)
from .protocol import Protocol
from .version import __version__

__all__ = ['ConnectException',
           'Connector',
           'ErrorInfo',
           'IllegalArgumentException',
           'IllegalStateException',
           'IncompleteRequestException',
           'InetConnector',
           'InvalidHeaderException',
           'InvalidRequestException',
           'KeyFieldNotFoundException',
           'Livestatus',
           'LivestatusConfig',
           'LivestatusException',
           'LocalException',
           'MalformedHeaderException',
           'NoHeaderException',
           'NotFoundException',
           'Protocol',
           'QueryResult',
           'RemoteException',
           'ReservedHeaderException',
           'ResponseHeader',
           'SeparatorSet',
           'ShortHeaderException',
           'SocketException',
           'UnixConnector',
           'UnknownColumnException'
           ]
