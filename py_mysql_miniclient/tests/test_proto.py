import doctest
import unittest

from py_mysql_miniclient.errors import ProtocolError
from py_mysql_miniclient.lib import utils
from py_mysql_miniclient.protocol import proto
from py_mysql_miniclient.protocol.proto import Proto, scramble_native_password

__all__ = ["TestProto"]


class TestProto(unittest.TestCase):

    def test_doctests(self):
        for module in (proto, utils):
            failures, _ = doctest.testmod(module)
            self.assertEqual(failures, 0, module.__name__)

    def test_lenenc_int_round_trip(self):
        widths = {
            0: 1,
            250: 1,
            251: 3,
            0xFFFF: 3,
            0x10000: 4,
            0xFFFFFF: 4,
            0x1000000: 9,
            2 ** 63 - 1: 9,
        }
        for value, width in widths.items():
            packet = Proto.build_lenenc_int(value)
            self.assertEqual(len(packet), width, value)
            cursor = Proto(packet)
            self.assertEqual(cursor.get_lenenc_int(), value)
            self.assertFalse(cursor.has_remaining_data())

    def test_lenenc_int_prefixes(self):
        self.assertEqual(Proto.build_lenenc_int(251)[0], 0xfc)
        self.assertEqual(Proto.build_lenenc_int(0x10000)[0], 0xfd)
        self.assertEqual(Proto.build_lenenc_int(0x1000000)[0], 0xfe)

    def test_negative_lenenc_int(self):
        with self.assertRaises(ValueError):
            Proto.build_lenenc_int(-1)

    def test_lenenc_int_null(self):
        cursor = Proto(bytearray(b'\xfb\x05'))
        self.assertIsNone(cursor.get_lenenc_int())
        self.assertEqual(cursor.get_lenenc_int(), 5)

    def test_lenenc_int_invalid_prefix(self):
        with self.assertRaises(ProtocolError):
            Proto(bytearray(b'\xff\x00\x00')).get_lenenc_int()

    def test_lenenc_int_truncated(self):
        with self.assertRaises(ProtocolError):
            Proto(bytearray(b'\xfc\x01')).get_lenenc_int()
        with self.assertRaises(ProtocolError):
            Proto(bytearray()).get_lenenc_int()

    def test_lenenc_str_null_and_empty(self):
        cursor = Proto(Proto.build_lenenc_str(None) + Proto.build_lenenc_str('') + Proto.build_lenenc_str('x'))
        self.assertIsNone(cursor.get_lenenc_str())
        self.assertEqual(cursor.get_lenenc_str(), '')
        self.assertEqual(cursor.get_lenenc_str(), 'x')

    def test_lenenc_str_utf8(self):
        packet = Proto.build_lenenc_str('héllo 世界')
        self.assertEqual(packet[0], 13)
        self.assertEqual(Proto(packet).get_lenenc_str(), 'héllo 世界')

    def test_lenenc_str_truncated(self):
        with self.assertRaises(ProtocolError):
            Proto(bytearray(b'\x05abc')).get_lenenc_str()

    def test_null_str_utf8(self):
        packet = Proto.build_null_str('röot')
        self.assertEqual(packet, bytearray(b'r\xc3\xb6ot\x00'))
        cursor = Proto(packet + b'next\x00')
        self.assertEqual(cursor.get_null_str(), 'röot')
        self.assertEqual(cursor.get_null_str(), 'next')
        self.assertFalse(cursor.has_remaining_data())

    def test_fixed_int(self):
        cursor = Proto(Proto.build_fixed_int(4, 0x00088205) + Proto.build_fixed_int(2, 0xc00f))
        self.assertEqual(cursor.get_fixed_int(4), 0x00088205)
        self.assertEqual(cursor.get_fixed_int(2), 0xc00f)
        with self.assertRaises(ProtocolError):
            cursor.get_fixed_int(1)

    def test_scramble_native_password(self):
        message = b'12345678901234567890'
        scrambled = scramble_native_password('secret', message)
        self.assertEqual(len(scrambled), 20)
        self.assertEqual(scrambled, scramble_native_password(b'secret', message))
        self.assertNotEqual(scrambled, scramble_native_password('other', message))
        self.assertEqual(scramble_native_password('', message), b'')
