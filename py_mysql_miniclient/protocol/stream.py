# coding=utf-8
import logging

from py_mysql_miniclient.errors import ProtocolError, TransportError
from py_mysql_miniclient.protocol.packet import read_packet, write_packet

logger = logging.getLogger('py_mysql_miniclient')


class PacketStream(object):
    """
    Frames packets over a binary stream and keeps the sequence id of the
    current command cycle.

    Every packet in a cycle, sent or received, takes the next sequence id.
    A received packet carrying any other id means client and server are
    out of sync.
    """

    def __init__(self, stream):
        self._stream = stream
        self.sequenceId = 0

    def reset(self):
        """
        Start a new command cycle
        """
        self.sequenceId = 0

    def _next(self):
        current = self.sequenceId
        self.sequenceId = (self.sequenceId + 1) & 0xFF
        return current

    def read(self):
        packet = self._read()
        expected = self._next()
        if packet.sequenceId != expected:
            raise ProtocolError("packet sequence id %d received, %d expected" % (packet.sequenceId, expected))
        return packet

    def read_greeting(self):
        """
        Read the first packet of a connection and adopt its sequence id
        """
        packet = self._read()
        self.sequenceId = (packet.sequenceId + 1) & 0xFF
        return packet

    def write(self, packet):
        """
        Send a Packet object at the next sequence id
        """
        packet.sequenceId = self.sequenceId
        try:
            write_packet(self._stream, packet.getPayload(), packet.sequenceId)
        except OSError as e:
            raise TransportError("write failed: %s" % e) from e
        self._next()

    def _read(self):
        try:
            return read_packet(self._stream)
        except OSError as e:
            raise TransportError("read failed: %s" % e) from e
