#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

import unittest
from socket import socketpair
from threading import Thread

from mklivestatus import (
    IncompleteRequestException, InvalidHeaderException,
    InvalidRequestException, MalformedHeaderException, NoHeaderException,
    NotFoundException, Protocol, RemoteException, ReservedHeaderException,
    SeparatorSet, ShortHeaderException, SocketException,
    UnknownColumnException)
from testutils import make_response


class TestProtocol(unittest.TestCase):

    def setUp(self):
        self.separators = SeparatorSet()

    def testCheckStatementReservedHeaders(self):
        cases = [('Separators: 10 0 44 124', 492),
                 ('KeepAlive: on', 496),
                 ('ResponseHeader: fixed16', 495),
                 ('ColumnHeaders: on', 494),
                 ('OutputFormat: json', 493)]
        for line, code in cases:
            statement = 'GET hosts\nColumns: name\n' + line
            try:
                Protocol.check_statement(statement)
            except ReservedHeaderException as rhe:
                self.assertEqual(rhe.get_code(), code)
                self.assertTrue(line.startswith(rhe.get_header()))
            else:
                self.fail('no exception for ' + line)

    def testCheckStatementReservedHeaderOrder(self):
        # Separators is checked before KeepAlive, whatever the line order.
        statement = 'GET hosts\nKeepAlive: on\nSeparators: 1 2 3 4'
        with self.assertRaises(ReservedHeaderException) as cm:
            Protocol.check_statement(statement)
        self.assertEqual(cm.exception.get_code(), 492)

    def testCheckStatementNotAtLineStart(self):
        Protocol.check_statement('GET hosts\nFilter: name = Separators:')
        Protocol.check_statement('GET hosts\n Separators: 1 2 3 4')
        Protocol.check_statement('GET hosts\nColumns: name')

    def testCheckStatementOnlyNewlineEndsLine(self):
        # Other line breaking characters do not start a new line on the wire.
        for sep in ['\r', '\x0b', '\x0c', '\x1c', '\x85', ' ']:
            Protocol.check_statement('GET hosts' + sep + 'KeepAlive: on')
        self.assertRaises(ReservedHeaderException, Protocol.check_statement,
                          'GET hosts\r\nKeepAlive: on')

    def testBuildRequest(self):
        self.assertEqual(
            Protocol.build_request('GET hosts', self.separators),
            b'GET hosts\nSeparators: 10 0 44 124\nResponseHeader: fixed16\n')
        self.assertEqual(
            Protocol.build_request('GET hosts\nColumns: name',
                                   SeparatorSet(1, 2, 3, 4), True),
            b'GET hosts\nColumns: name\nSeparators: 1 2 3 4\n' +
            b'ResponseHeader: fixed16\nKeepAlive: on\n')

    def testBuildRequestCommand(self):
        statement = 'COMMAND [1234567890] DISABLE_HOST_CHECK;foo'
        self.assertTrue(Protocol.is_command(statement))
        self.assertEqual(Protocol.build_request(statement, self.separators),
                         statement.encode() + b'\n')
        self.assertEqual(
            Protocol.build_request(statement, self.separators, True),
            statement.encode() + b'\nKeepAlive: on\n')
        self.assertFalse(Protocol.is_command('GET commands'))

    def testParseHeader(self):
        header = Protocol.parse_header(make_response(200, b'x' * 1234))
        self.assertEqual(header.get_status(), 200)
        self.assertEqual(header.get_content_length(), 1234)
        self.assertTrue(header.is_ok())
        header = Protocol.parse_header(b'404' + b' ' * 10 + b'12\n')
        self.assertEqual(header.get_status(), 404)
        self.assertEqual(header.get_content_length(), 12)
        self.assertFalse(header.is_ok())

    def testParseHeaderIgnoresPadding(self):
        # Bytes 3 and 4 are never looked at.
        header = Protocol.parse_header(b'200xy' + b' ' * 9 + b'0\n')
        self.assertEqual(header.get_status(), 200)
        self.assertEqual(header.get_content_length(), 0)
        header = Protocol.parse_header(b'200 7 \t       9 ')
        self.assertEqual(header.get_content_length(), 9)

    def testParseHeaderLength(self):
        self.assertRaises(NoHeaderException, Protocol.parse_header, b'')
        with self.assertRaises(ShortHeaderException) as cm:
            Protocol.parse_header(b'200' + b' ' * 7)
        self.assertEqual(cm.exception.get_code(), 498)
        self.assertRaises(ShortHeaderException, Protocol.parse_header,
                          b'200' + b' ' * 11 + b'123\n')

    def testParseHeaderMalformed(self):
        with self.assertRaises(MalformedHeaderException) as cm:
            Protocol.parse_header(b'200' + b' ' * 8 + b'abcd\n')
        self.assertEqual(cm.exception.get_code(), 499)
        self.assertEqual(cm.exception.get_message(),
                         'failed to get content-length from header')
        self.assertRaises(MalformedHeaderException, Protocol.parse_header,
                          b'200' + b' ' * 11 + b'\n\n')
        self.assertRaises(MalformedHeaderException, Protocol.parse_header,
                          b'2x0' + b' ' * 11 + b'4\n')

    def testReadHeaderAndBody(self):
        a, b = socketpair()
        try:
            b.sendall(make_response(200, b'name\x00alias\n'))
            header = Protocol.read_header(a)
            self.assertEqual(header.get_content_length(), 11)
            self.assertEqual(Protocol.read_body(a, 11), b'name\x00alias\n')
        finally:
            a.close()
            b.close()

    def testReadHeaderClosedConnection(self):
        a, b = socketpair()
        b.close()
        try:
            with self.assertRaises(NoHeaderException) as cm:
                Protocol.read_header(a)
            self.assertEqual(cm.exception.get_code(), 497)
        finally:
            a.close()

    def testReadHeaderShort(self):
        a, b = socketpair()
        b.sendall(b'200' + b' ' * 7)
        b.close()
        try:
            self.assertRaises(ShortHeaderException, Protocol.read_header, a)
        finally:
            a.close()

    def testReadBodyEmpty(self):
        a, b = socketpair()
        try:
            b.sendall(b'x')
            self.assertIsNone(Protocol.read_body(a, 0))
            # Nothing was consumed.
            self.assertEqual(a.recv(1), b'x')
        finally:
            a.close()
            b.close()

    def testReadBodyShort(self):
        a, b = socketpair()
        b.sendall(b'abc')
        b.close()
        try:
            with self.assertRaises(SocketException) as cm:
                Protocol.read_body(a, 10)
            self.assertEqual(cm.exception.get_code(), 500)
        finally:
            a.close()

    def testReadBodyHugeLength(self):
        # A length near the limit of the header field, with a short body.
        a, b = socketpair()
        b.sendall(b'abc')
        b.close()
        try:
            with self.assertRaises(SocketException) as cm:
                Protocol.read_body(a, 99999999999)
            self.assertEqual(cm.exception.get_code(), 500)
            self.assertIn('got 3 of 99999999999 bytes',
                          cm.exception.get_message())
        finally:
            a.close()

    def testReadFullyChunks(self):
        a, b = socketpair()
        data = b'x' * (Protocol.READ_CHUNK_SIZE * 2 + 10)
        try:
            sender = Thread(target=b.sendall, args=(data,))
            sender.start()
            self.assertEqual(Protocol.read_fully(a, len(data)), data)
            sender.join()
        finally:
            a.close()
            b.close()

    def testSendRequest(self):
        a, b = socketpair()
        try:
            Protocol.send_request(a, b'GET hosts\n')
            received = b''
            while True:
                chunk = b.recv(1024)
                if not chunk:
                    break
                received += chunk
            self.assertEqual(received, b'GET hosts\n')
        finally:
            a.close()
            b.close()

    def testSendRequestKeepalive(self):
        a, b = socketpair()
        try:
            Protocol.send_request(a, b'GET hosts\nKeepAlive: on\n', True)
            expected = b'GET hosts\nKeepAlive: on\n\n'
            self.assertEqual(Protocol.read_fully(b, len(expected)), expected)
            # The write side is still open.
            a.sendall(b'more')
            self.assertEqual(Protocol.read_fully(b, 4), b'more')
        finally:
            a.close()
            b.close()

    def testMapException(self):
        cases = [(401, InvalidHeaderException),
                 (402, InvalidRequestException),
                 (403, IncompleteRequestException),
                 (404, NotFoundException),
                 (405, UnknownColumnException)]
        for status, cls in cases:
            exception = Protocol.map_exception(status, b'details\n')
            self.assertIsInstance(exception, cls)
            self.assertEqual(exception.get_code(), status)
            self.assertEqual(exception.get_message(),
                             Protocol.STATUS_MESSAGES[status] + '\ndetails')

    def testMapExceptionUnknownStatus(self):
        exception = Protocol.map_exception(452)
        self.assertIs(type(exception), RemoteException)
        self.assertEqual(exception.get_code(), 452)
        self.assertEqual(exception.get_message(),
                         Protocol.UNKNOWN_STATUS_MESSAGE + '\n')

    def testDecodeBodyHeadingRow(self):
        result = Protocol.decode_body(
            b'name\x00alias\nlocalhost\x00Local host\n', 'GET hosts',
            self.separators)
        self.assertEqual(result.get_keys(), ['name', 'alias'])
        self.assertEqual(result.get_rows(), [['localhost', 'Local host']])

    def testDecodeBodyColumns(self):
        result = Protocol.decode_body(
            b'localhost\x000\ngateway\x001\n',
            'GET hosts\nColumns: name  state', self.separators)
        self.assertEqual(result.get_keys(), ['name', 'state'])
        self.assertEqual(result.get_rows(),
                         [['localhost', '0'], ['gateway', '1']])

    def testDecodeBodyStats(self):
        result = Protocol.decode_body(
            b'5\x002\n', 'GET hosts\nStats: state = 0\nStats: state = 1',
            self.separators)
        self.assertEqual(result.get_keys(), ['state = 0', 'state = 1'])
        self.assertEqual(result.get_rows(), [['5', '2']])

    def testDecodeBodyColumnsBeforeStats(self):
        result = Protocol.decode_body(
            b'x\x001\n', 'GET hosts\nStats: sum(x)\nColumns: a b',
            self.separators)
        self.assertEqual(result.get_keys(), ['a', 'b'])
        self.assertEqual(result.get_rows(), [['x', '1']])

    def testDecodeBodyEmptyFields(self):
        result = Protocol.decode_body(
            b'a\x00\x00c\n\x00\x00\n', 'GET hosts\nColumns: a b c',
            self.separators)
        self.assertEqual(result.get_rows(), [['a', '', 'c'], ['', '', '']])

    def testDecodeBodySeparators(self):
        separators = SeparatorSet(3, 4, 5, 6)
        rows = [['host1', 'a\x05b', ''], ['host2', '', 'h|s']]
        body = b'\x03'.join(
            b'\x04'.join(field.encode() for field in row) for row in rows)
        result = Protocol.decode_body(body, 'GET hosts\nColumns: x y z',
                                      separators)
        self.assertEqual(result.get_rows(), rows)

    def testDecodeBodyNone(self):
        result = Protocol.decode_body(None, 'GET hosts', self.separators)
        self.assertIsNone(result.get_keys())
        self.assertEqual(result.get_rows(), [])
        result = Protocol.decode_body(b'\n', 'GET hosts', self.separators)
        self.assertIsNone(result.get_keys())
        self.assertEqual(result.get_rows(), [])

    def testDecodeBodyUtf8(self):
        result = Protocol.decode_body(
            'name\nhöst\n'.encode('utf-8') + b'\xff\n', 'GET hosts',
            self.separators)
        self.assertEqual(result.get_rows(), [['höst'], ['\ufffd']])


if __name__ == '__main__':
    unittest.main()
