# coding=utf-8
import hashlib
from functools import partial

from py_mysql_miniclient.errors import ProtocolError
from py_mysql_miniclient.protocol import Flags


def _to_bytes(value):
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return value.encode(Flags.CLIENT_ENCODING)


def _to_text(value):
    return bytes(value).decode(Flags.CLIENT_ENCODING, "replace")


class Proto(object):
    """
    A read cursor over one packet payload, plus the builders for the
    MySQL basic data types.

    https://dev.mysql.com/doc/internals/en/basic-types.html
    """
    __slots__ = ('packet', 'offset')

    def __init__(self, packet, offset=0):
        self.packet = packet
        self.offset = offset

    def has_remaining_data(self):
        return len(self.packet) - self.offset > 0

    def _require(self, size):
        if self.offset + size > len(self.packet):
            raise ProtocolError("packet too short: %d bytes needed at offset %d, payload is %d bytes" % (
                size, self.offset, len(self.packet)))

    @staticmethod
    def build_fixed_int(size, value):
        """
        Build a MySQL Fixed Int

        >>> Proto.build_fixed_int(1, 0)
        bytearray(b'\\x00')

        >>> Proto.build_fixed_int(1, 255)
        bytearray(b'\\xff')

        >>> Proto.build_fixed_int(2, 0xFFFF)
        bytearray(b'\\xff\\xff')

        >>> Proto.build_fixed_int(3, 0x010203)
        bytearray(b'\\x03\\x02\\x01')

        >>> Proto.build_fixed_int(8, 255)
        bytearray(b'\\xff\\x00\\x00\\x00\\x00\\x00\\x00\\x00')
        """
        packet = bytearray(size)
        for i in range(size):
            packet[i] = ((value >> (8 * i)) & 0xFF)
        return packet

    @staticmethod
    def build_lenenc_int(value):
        """
        Build a MySQL Length Encoded Int, always in its shortest form

        >>> Proto.build_lenenc_int(0)
        bytearray(b'\\x00')

        >>> Proto.build_lenenc_int(250)
        bytearray(b'\\xfa')

        >>> Proto.build_lenenc_int(251)
        bytearray(b'\\xfc\\xfb\\x00')

        >>> Proto.build_lenenc_int(0xFFFF)
        bytearray(b'\\xfc\\xff\\xff')

        >>> Proto.build_lenenc_int(2**16)
        bytearray(b'\\xfd\\x00\\x00\\x01')

        >>> Proto.build_lenenc_int(2**24)
        bytearray(b'\\xfe\\x00\\x00\\x00\\x01\\x00\\x00\\x00\\x00')
        """
        if value < 0:
            raise ValueError("Cannot build a negative length encoded int: %d" % value)
        if value < Flags.NULL:
            return Proto.build_fixed_int(1, value)
        elif value <= 0xFFFF:
            packet = Proto.build_byte(Flags.LENENC_INT_2)
            packet.extend(Proto.build_fixed_int(2, value))
        elif value <= 0xFFFFFF:
            packet = Proto.build_byte(Flags.LENENC_INT_3)
            packet.extend(Proto.build_fixed_int(3, value))
        else:
            packet = Proto.build_byte(Flags.LENENC_INT_8)
            packet.extend(Proto.build_fixed_int(8, value))
        return packet

    @staticmethod
    def build_lenenc_str(value):
        """
        Build a MySQL Length Encoded String

        >>> Proto.build_lenenc_str('abc')
        bytearray(b'\\x03abc')

        Empty strings are supported:
        >>> Proto.build_lenenc_str('')
        bytearray(b'\\x00')

        None is written as the NULL marker:
        >>> Proto.build_lenenc_str(None)
        bytearray(b'\\xfb')
        """
        if value is None:
            return Proto.build_byte(Flags.NULL)

        value = _to_bytes(value)
        packet = Proto.build_lenenc_int(len(value))
        packet.extend(value)
        return packet

    @staticmethod
    def build_null_str(value):
        """
        Build a MySQL Null String

        >>> Proto.build_null_str('ab')
        bytearray(b'ab\\x00')

        Empty string is just a null:
        >>> Proto.build_null_str('')
        bytearray(b'\\x00')
        """
        value = _to_bytes(value)
        return Proto.build_fixed_str(len(value) + 1, value)

    @staticmethod
    def build_fixed_str(size, value):
        """
        Build a MySQL Fixed String

        >>> Proto.build_fixed_str(2, 'ab')
        bytearray(b'ab')

        Zero pad if size > sizeOf(value):
        >>> Proto.build_fixed_str(3, 'ab')
        bytearray(b'ab\\x00')
        """
        value = _to_bytes(value)[:size]
        packet = bytearray(size)
        packet[0:len(value)] = value
        return packet

    @staticmethod
    def build_eop_str(value):
        """
        Build a MySQL End of Packet String

        >>> Proto.build_eop_str('ab')
        bytearray(b'ab')
        """
        return bytearray(_to_bytes(value))

    @staticmethod
    def build_filler(size, fill=0x00):
        """
        Build a set of filler

        >>> Proto.build_filler(2)
        bytearray(b'\\x00\\x00')

        >>> Proto.build_filler(1, 0x1c)
        bytearray(b'\\x1c')
        """
        packet = bytearray(size)
        for i in range(size):
            packet[i] = fill
        return packet

    @staticmethod
    def build_byte(value):
        """
        Build a extendable byte

        >>> Proto.build_byte(0xFF)
        bytearray(b'\\xff')
        """
        packet = bytearray(1)
        packet[0] = value
        return packet

    @staticmethod
    def get_fixed_int_sniplet(packet):
        """
        Extract a fixed int from a packet subset

        >>> Proto.get_fixed_int_sniplet(Proto.build_fixed_int(1, 255))
        255

        >>> Proto.get_fixed_int_sniplet(Proto.build_fixed_int(3, 0x010203))
        66051
        """
        value = 0
        for i in range(len(packet)-1, 0, -1):
            value |= packet[i] & 0xFF
            value <<= 8
        value |= packet[0] & 0xFF
        return value

    def get_fixed_int(self, size):
        """
        Extract a fixed int the current packet

        >>> packet = Proto(Proto.build_fixed_int(2, 513))
        >>> packet.get_fixed_int(2)
        513
        """
        self._require(size)
        value = Proto.get_fixed_int_sniplet(
            self.packet[self.offset:self.offset+size])
        self.offset += size
        return value

    def get_filler(self, size):
        """
        Skip over packet filler

        >>> packet = Proto(bytearray(5))
        >>> packet.get_filler(2)
        >>> packet.offset
        2
        """
        self._require(size)
        self.offset += size

    def get_lenenc_int(self):
        """
        Extract a Length Encoded Int from the current packet position.
        Returns None for the NULL marker.

        >>> Proto(Proto.build_lenenc_int(70000)).get_lenenc_int()
        70000

        >>> Proto(Proto.build_byte(0xfb)).get_lenenc_int() is None
        True
        """
        self._require(1)
        first = self.packet[self.offset]

        if first < Flags.NULL:
            size = 1
        elif first == Flags.NULL:
            self.offset += 1
            return None
        elif first == Flags.LENENC_INT_2:
            self.offset += 1
            size = 2
        elif first == Flags.LENENC_INT_3:
            self.offset += 1
            size = 3
        elif first == Flags.LENENC_INT_8:
            self.offset += 1
            size = 8
        else:
            raise ProtocolError("invalid length encoded int prefix 0x%02x at offset %d" % (first, self.offset))

        return self.get_fixed_int(size)

    def get_fixed_bytes(self, size):
        self._require(size)
        value = bytes(self.packet[self.offset:self.offset + size])
        self.offset += size
        return value

    def get_fixed_str(self, size):
        """
        Extract a fixed length string from the current packet position

        >>> target = "The brown dog did stuff"
        >>> pckt = Proto.build_fixed_str(len(target), target)
        >>> Proto(pckt).get_fixed_str(len(pckt))
        'The brown dog did stuff'
        """
        return _to_text(self.get_fixed_bytes(size))

    def get_null_str(self):
        """
        Extract a null string from the current packet position

        >>> target = "The brown dog did stuff"
        >>> pckt = Proto.build_null_str(target)
        >>> Proto(pckt).get_null_str()
        'The brown dog did stuff'
        """
        end = self.packet.find(b'\x00', self.offset)
        if end < 0:
            end = len(self.packet)
        value = _to_text(self.packet[self.offset:end])
        self.offset = min(end + 1, len(self.packet))
        return value

    def get_eop_str(self):
        """
        Extract a eop string from the current packet position

        >>> target = "The brown dog did stuff"
        >>> pckt = Proto.build_eop_str(target)
        >>> Proto(pckt).get_eop_str()
        'The brown dog did stuff'
        """
        end = len(self.packet)
        if end > self.offset and self.packet[end - 1] == 0x00:
            end -= 1
        value = _to_text(self.packet[self.offset:end])
        self.offset = len(self.packet)
        return value

    def get_lenenc_str(self):
        """
        Extract a length encoded string from the current packet position.
        Returns None for a NULL value, which is not the same as ''.

        >>> target = "The brown dog did stuff"
        >>> pckt = Proto.build_lenenc_str(target)
        >>> Proto(pckt).get_lenenc_str()
        'The brown dog did stuff'

        >>> Proto(Proto.build_lenenc_str(None)).get_lenenc_str() is None
        True
        """
        size = self.get_lenenc_int()
        if size is None:
            return None
        return _to_text(self.get_fixed_bytes(size))


sha1_new = partial(hashlib.new, 'sha1')


# mysql_native_password
# https://dev.mysql.com/doc/internals/en/secure-password-authentication.html#packet-Authentication::Native41

def scramble_native_password(password, message):
    """Scramble used for mysql_native_password"""
    if not password:
        return b''

    password = _to_bytes(password)
    message = _to_bytes(message)

    stage1 = sha1_new(password).digest()
    stage2 = sha1_new(stage1).digest()
    s = sha1_new()
    s.update(message[:Flags.SCRAMBLE_LENGTH])
    s.update(stage2)
    result = s.digest()
    return _my_crypt(result, stage1)


def _my_crypt(message1, message2):
    result = bytearray(message1)

    for i in range(len(result)):
        result[i] ^= message2[i]

    return bytes(result)


if __name__ == "__main__":
    import doctest
    doctest.testmod()
