import io
import unittest

from pymysql.constants import FIELD_TYPE

from py_mysql_miniclient.com.query import execute_query
from py_mysql_miniclient.errors import ProtocolError, QueryError, ServerError, TransportError
from py_mysql_miniclient.packet.column_definition import ColumnDefinition
from py_mysql_miniclient.packet.text_row import TextRow
from py_mysql_miniclient.protocol.eof import EOF
from py_mysql_miniclient.protocol.err import ERR
from py_mysql_miniclient.protocol.ok import OK
from py_mysql_miniclient.protocol.packet import RawPacket, build_packet, read_packet
from py_mysql_miniclient.protocol.stream import PacketStream
from py_mysql_miniclient.result import ColumnDef
from py_mysql_miniclient.tests.helpers import Duplex, column_count, frame, result_set_bytes

__all__ = ["TestQuery"]


class TestQuery(unittest.TestCase):

    def test_command_packet(self):
        duplex = Duplex(frame(OK()))
        stream = PacketStream(duplex)
        stream.sequenceId = 9
        execute_query(stream, "select 'ü'")

        self.assertEqual(duplex.outgoing.getvalue(), b"\x0c\x00\x00\x00\x03select '\xc3\xbc'")

    def test_error(self):
        duplex = Duplex(frame(ERR(1146, '42S02', "Table 'db1.t2' doesn't exist")))
        with self.assertRaises(QueryError) as cm:
            execute_query(PacketStream(duplex), 'select * from t2')

        self.assertIsInstance(cm.exception, ServerError)
        self.assertEqual(cm.exception.errno, 1146)
        self.assertEqual(cm.exception.sqlstate, '42S02')
        self.assertIn("Table 'db1.t2' doesn't exist", str(cm.exception))

    def test_ok(self):
        duplex = Duplex(frame(OK(affectedRows=0)))
        result = execute_query(PacketStream(duplex), 'set @a = 1')

        self.assertEqual(result.column_count, 0)
        self.assertEqual(result.row_count, 0)
        self.assertEqual(result.columns, ())
        self.assertEqual(result.rows, [])
        self.assertFalse(result.has_result_set)

    def test_ok_affected_rows(self):
        duplex = Duplex(frame(OK(affectedRows=3, lastInsertId=70000)))
        result = execute_query(PacketStream(duplex), 'delete from t1')
        self.assertEqual(result.affected_rows, 3)
        self.assertEqual(result.last_insert_id, 70000)

    def test_result_set(self):
        duplex = Duplex(result_set_bytes())
        result = execute_query(PacketStream(duplex), 'select id, name from t1')

        self.assertEqual(result.columns, (
            ColumnDef('db1', 't1', 'id', FIELD_TYPE.LONG),
            ColumnDef('db1', 't1', 'name', FIELD_TYPE.VAR_STRING),
        ))
        self.assertEqual(result.rows, [('1', 'alvin'), ('2', None)])
        for row in result:
            self.assertEqual(len(row), 2)
        self.assertIsNone(result.value(2, 'NAME'))

    def test_empty_string_is_not_null(self):
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('', '', 'c'),
            EOF(),
            TextRow(['']),
            TextRow([None]),
            EOF(),
        ))
        result = execute_query(PacketStream(duplex), "select c from t")
        self.assertEqual(result.rows, [('',), (None,)])

    def test_no_rows(self):
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('db1', 't1', 'id'),
            EOF(),
            EOF(),
        ))
        result = execute_query(PacketStream(duplex), 'select id from t1 where 1 = 0')
        self.assertEqual(result.column_count, 1)
        self.assertEqual(result.row_count, 0)
        self.assertTrue(result.has_result_set)

    def test_short_eof(self):
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('db1', 't1', 'id'),
            RawPacket(payload=b'\xfe'),
            TextRow(['1']),
            RawPacket(payload=b'\xfe'),
        ))
        result = execute_query(PacketStream(duplex), 'select id from t1')
        self.assertEqual(result.rows, [('1',)])

    def test_large_values(self):
        big = 'x' * 70000
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('', '', 'big', FIELD_TYPE.BLOB),
            EOF(),
            TextRow([big]),
            EOF(),
        ))
        result = execute_query(PacketStream(duplex), 'select big')
        self.assertEqual(result.value(1, 1), big)

    def test_decode_twice(self):
        data = result_set_bytes()
        first = execute_query(PacketStream(Duplex(data)), 'select id, name from t1')
        second = execute_query(PacketStream(Duplex(data)), 'select id, name from t1')
        self.assertEqual(first, second)

    def test_sequence_reset(self):
        duplex = Duplex(frame(OK()) + frame(OK()))
        stream = PacketStream(duplex)
        execute_query(stream, 'select 1')
        execute_query(stream, 'select 2')

        out = io.BytesIO(duplex.outgoing.getvalue())
        self.assertEqual([read_packet(out).sequenceId for _ in range(2)], [0, 0])

    def test_error_in_rows(self):
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('db1', 't1', 'id'),
            EOF(),
            TextRow(['1']),
            ERR(1317, '70100', 'Query execution was interrupted'),
        ))
        with self.assertRaises(QueryError) as cm:
            execute_query(PacketStream(duplex), 'select id from t1')
        self.assertIn('interrupted', str(cm.exception))

    def test_missing_column_eof(self):
        duplex = Duplex(frame(
            column_count(1),
            ColumnDefinition('db1', 't1', 'id'),
            TextRow(['1']),
            EOF(),
        ))
        with self.assertRaises(ProtocolError):
            execute_query(PacketStream(duplex), 'select id from t1')

    def test_invalid_column_count(self):
        duplex = Duplex(frame(RawPacket(payload=b'\xfb')))
        with self.assertRaises(ProtocolError):
            execute_query(PacketStream(duplex), 'select 1')

    def test_out_of_sequence(self):
        data = build_packet(column_count(1).getPayload(), 1) + build_packet(
            ColumnDefinition('db1', 't1', 'id').getPayload(), 3)
        with self.assertRaises(ProtocolError):
            execute_query(PacketStream(Duplex(bytes(data))), 'select id from t1')

    def test_truncated_response(self):
        data = result_set_bytes()
        with self.assertRaises(TransportError):
            execute_query(PacketStream(Duplex(data[:-3])), 'select id, name from t1')
