# coding=utf-8
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class TextRow(Packet):
    """
    One row of a text protocol result set: a lenenc_str per column,
    0xfb for NULL.
    """
    __slots__ = ('values',) + Packet.__slots__

    def __init__(self, values=()):
        super(TextRow, self).__init__()
        self.values = tuple(values)

    def getPayload(self):
        payload = bytearray()

        for value in self.values:
            payload.extend(Proto.build_lenenc_str(value))

        return payload

    @staticmethod
    def loadFromPacket(payload, column_count):
        proto = Proto(payload)
        return TextRow(proto.get_lenenc_str() for _ in range(column_count))
