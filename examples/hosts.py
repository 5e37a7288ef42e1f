#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

#
# This is a simple example to demonstrate use of the livestatus client. It
# can be run against the UNIX socket of a local monitoring core or against a
# livestatus TCP server.
#
# The example demonstrates:
# o creating a handle to access livestatus
# o querying hosts as rows, dicts and single columns
# o querying statistics
# o handling failed queries without exceptions
#
# Requirements:
#  1. Python 3.6+
#  2. A monitoring core with the livestatus module loaded
#
# To run:
#  1. set PYTHONPATH to include the parent directory of ../src/mklivestatus
#  2. run with the socket path or a host:port address
#    $ python hosts.py /var/lib/nagios3/rw/livestatus.sock
#    $ python hosts.py localhost:6557
#

import sys
import traceback

from mklivestatus import Livestatus


def get_handle(address):
    if address.startswith('/'):
        return Livestatus(address, keepalive=True)
    return Livestatus(server=address, keepalive=True)


def main():
    if len(sys.argv) != 2:
        print('usage: hosts.py <socket path or host:port>')
        sys.exit(1)

    handle = None
    try:
        handle = get_handle(sys.argv[1])

        #
        # All hosts, each as a dict
        #
        statement = 'GET hosts\nColumns: name alias state'
        for host in handle.select_all(statement, slice=True):
            print(host['name'] + ' (' + host['alias'] + '): ' + host['state'])

        #
        # The contacts of each host
        #
        values = handle.select_column(
            'GET hosts\nColumns: name contacts', columns=[1, 2])
        contacts = dict(zip(values[::2], values[1::2]))
        print('Contacts: ' + str(contacts))

        #
        # Statistics
        #
        up, down = handle.select_row(
            'GET hosts\nStats: state = 0\nStats: state = 1')
        print('Hosts up: ' + up + ', down: ' + down)

        #
        # A failing query, reported through the last error
        #
        handle.errors_are_fatal(False)
        if handle.select_all('GET hostz') is None:
            print('Error ' + str(handle.get_error_code()) + ': ' +
                  handle.get_error_message())
    except Exception as e:
        print(e)
        traceback.print_exc()
    finally:
        # If the handle isn't closed Python will not exit properly
        if handle is not None:
            handle.close()


if __name__ == '__main__':
    main()
