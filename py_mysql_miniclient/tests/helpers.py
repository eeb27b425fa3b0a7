import io

from pymysql.constants import FIELD_TYPE

from py_mysql_miniclient.packet.challenge import Challenge
from py_mysql_miniclient.packet.column_definition import ColumnDefinition
from py_mysql_miniclient.packet.text_row import TextRow
from py_mysql_miniclient.protocol.eof import EOF
from py_mysql_miniclient.protocol.ok import OK
from py_mysql_miniclient.protocol.packet import RawPacket, build_packet, read_packet
from py_mysql_miniclient.protocol.proto import Proto

AUTH_DATA = b'12345678abcdefghijkl'

# Greeting with 13 bytes of auth data in part 2 followed by a terminator
COMPAT_GREETING = (b"\x0a" + b"PcSQL-MySQL-Compat 0.1\x00" + b"\xd2\x04\x00\x00" + b"abcdefgh" + b"\x00" +
                   b"\x0d\xa2" + b"\x2d" + b"\x02\x00" + b"\x08\x00" + b"\x15" + bytes(10) +
                   b"ijklmnopqrstu" + b"\x00" + b"mysql_native_password\x00")


class Duplex(object):
    """
    Reads what the server sent, keeps what the client wrote
    """

    def __init__(self, incoming=b''):
        self.incoming = io.BytesIO(incoming)
        self.outgoing = io.BytesIO()

    def read(self, size):
        return self.incoming.read(size)

    def write(self, data):
        return self.outgoing.write(data)

    def flush(self):
        pass

    def sent_packets(self):
        return read_all(self.outgoing.getvalue())


def read_all(data):
    stream = io.BytesIO(data)
    packets = []
    while stream.tell() < len(data):
        packets.append(read_packet(stream))
    return packets


def frame(*packets, start=1):
    """
    Frame packets in order, the first one at sequence id start
    """
    data = bytearray()
    for sequenceId, packet in enumerate(packets, start):
        data.extend(build_packet(packet.getPayload(), sequenceId))
    return bytes(data)


def create_challenge():
    challenge = Challenge()
    challenge.protocolVersion = 10
    challenge.serverVersion = '5.7.20-log'
    challenge.connectionId = 42
    challenge.challenge1 = AUTH_DATA[:8]
    challenge.challenge2 = AUTH_DATA[8:]
    challenge.capabilityFlags = 4160717151
    challenge.characterSet = 224
    challenge.statusFlags = 2
    challenge.authPluginDataLength = 21
    challenge.authPluginName = 'mysql_native_password'
    return challenge


def login_bytes(ack=None):
    return frame(create_challenge(), start=0) + frame(ack or OK(), start=2)


def column_count(count):
    return RawPacket(payload=Proto.build_lenenc_int(count))


def result_set_bytes():
    return frame(
        column_count(2),
        ColumnDefinition('db1', 't1', 'id', FIELD_TYPE.LONG),
        ColumnDefinition('db1', 't1', 'name', FIELD_TYPE.VAR_STRING),
        EOF(),
        TextRow(['1', 'alvin']),
        TextRow(['2', None]),
        EOF(statusFlags=2),
    )
