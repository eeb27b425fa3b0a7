# coding=utf-8

import logging

from py_mysql_miniclient.errors import TransportError, UnsupportedOperation
from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.Flags import header_name
from py_mysql_miniclient.protocol.proto import Proto

logger = logging.getLogger('py_mysql_miniclient')


class Packet(object):
    """
    Basic class for all mysql proto classes to inherit from
    """
    __slots__ = ('sequenceId',)

    def __init__(self):
        self.sequenceId = None

    def getPayload(self):
        """
        Return the payload as a bytearray
        """
        raise NotImplementedError('getPayload')


class RawPacket(Packet):
    """
    A packet as read off the wire, not yet given a meaning
    """
    __slots__ = ('payload',) + Packet.__slots__

    def __init__(self, sequenceId=0, payload=b''):
        super(RawPacket, self).__init__()
        self.sequenceId = sequenceId
        self.payload = bytes(payload)

    def getPayload(self):
        return self.payload

    def __repr__(self):
        return "RawPacket(sequenceId=%r, payload=%r)" % (self.sequenceId, self.payload)


def hex_ba(string):
    ba = bytearray()
    fields = string.strip().split(' ')
    for field in fields:
        if field == '':
            continue
        ba_tmp = bytearray(1)
        ba_tmp[0] = int(field, 16)
        ba.extend(ba_tmp)
    return ba


def build_packet(payload, sequenceId):
    """
    Prefix a payload with its 3 byte length and the sequence id
    """
    size = len(payload)
    if size > Flags.MAX_PACKET_PAYLOAD:
        raise UnsupportedOperation("payload of %d bytes needs a multi-packet continuation" % size)

    packet = bytearray(size + Flags.PACKET_HEADER_LENGTH)

    packet[0:3] = Proto.build_fixed_int(3, size)
    packet[3] = sequenceId & 0xFF
    packet[4:] = payload

    return packet


def getSize(packet):
    """
    Returns a specified packet size
    """
    return Proto(packet).get_fixed_int(3)


def getSequenceId(packet):
    """
    Returns the Sequence ID for the given packet
    """
    return Proto(packet, 3).get_fixed_int(1)


def is_ok(payload):
    return len(payload) > 0 and payload[0] == Flags.OK


def is_err(payload):
    return len(payload) > 0 and payload[0] == Flags.ERR


def is_eof(payload):
    # a lenenc int with the 0xfe prefix is 9 bytes, so short packets are EOF
    return 0 < len(payload) <= Flags.EOF_MAX_LENGTH and payload[0] == Flags.EOF


def read_exactly(stream, size):
    """
    Reads size bytes from a binary stream or fails with a TransportError
    """
    buff = bytearray()
    while len(buff) < size:
        chunk = stream.read(size - len(buff))
        if not chunk:
            raise TransportError("unexpected end of stream: %d of %d bytes read" % (len(buff), size))
        buff.extend(chunk)
    return buff


def read_packet(stream):
    """
    Reads a packet from a stream
    """
    header = read_exactly(stream, Flags.PACKET_HEADER_LENGTH)

    size = getSize(header)
    sequenceId = getSequenceId(header)

    payload = read_exactly(stream, size) if size else bytearray()
    if logger.isEnabledFor(logging.DEBUG):
        dump(header + payload)

    return RawPacket(sequenceId, payload)


def write_packet(stream, payload, sequenceId):
    """
    Writes a packet to a stream and flushes it to the transport
    """
    packet = build_packet(payload, sequenceId)
    if logger.isEnabledFor(logging.DEBUG):
        dump(packet)

    stream.write(packet)
    stream.flush()


def dump(packet):
    """
    Dumps a packet to the logger
    """
    offset = 0

    if not logger.isEnabledFor(logging.DEBUG):
        return

    header = packet[4] if len(packet) > 4 else 0
    dump = 'Length: %s, SequenceId: %s, Header: %s=%s \n' % (
        getSize(packet), getSequenceId(packet), header_name(header), header,)

    while offset < len(packet):
        dump += hex(offset)[2:].zfill(8).upper()
        dump += '  '

        for x in range(16):
            if offset + x >= len(packet):
                dump += '   '
            else:
                dump += hex(packet[offset + x])[2:].upper().zfill(2)
                dump += ' '
                if x == 7:
                    dump += ' '

        dump += '  '

        for x in range(16):
            if offset + x >= len(packet):
                break
            c = chr(packet[offset + x])
            if (packet[offset + x] < 32
                    or packet[offset + x] >= 127):
                dump += '.'
            else:
                dump += c

            if x == 7:
                dump += ' '

        dump += '\n'
        offset += 16
    logger.debug(dump)
