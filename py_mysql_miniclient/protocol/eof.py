#!/usr/bin/env python
# coding=utf-8

from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class EOF(Packet):
    __slots__ = ('statusFlags', 'warnings') + Packet.__slots__

    def __init__(self, warnings=0, statusFlags=0):
        super(EOF, self).__init__()
        self.warnings = warnings
        self.statusFlags = statusFlags

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_byte(Flags.EOF))
        payload.extend(Proto.build_fixed_int(2, self.warnings))
        payload.extend(Proto.build_fixed_int(2, self.statusFlags))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        obj = EOF()
        proto = Proto(payload)

        proto.get_filler(1)
        if len(payload) >= Flags.EOF_MAX_LENGTH:
            obj.warnings = proto.get_fixed_int(2)
            obj.statusFlags = proto.get_fixed_int(2)

        return obj
