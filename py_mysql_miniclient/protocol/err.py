#!/usr/bin/env python
# coding=utf-8

from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto
from py_mysql_miniclient.protocol import Flags


class ERR(Packet):
    __slots__ = ('errorCode', 'sqlState', 'errorMessage') + Packet.__slots__

    def __init__(self, errorCode=0, sqlState="HY000", errorMessage=""):
        super(ERR, self).__init__()
        self.errorCode = errorCode
        self.sqlState = sqlState
        self.errorMessage = errorMessage

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_byte(Flags.ERR))
        payload.extend(Proto.build_fixed_int(2, self.errorCode))
        payload.extend(Proto.build_byte(ord('#')))
        payload.extend(Proto.build_fixed_str(5, self.sqlState))
        payload.extend(Proto.build_eop_str(self.errorMessage))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        """
        The sql state marker is optional, servers skip it for errors
        raised before the handshake completes.
        """
        obj = ERR()
        proto = Proto(payload)

        proto.get_filler(1)
        if proto.has_remaining_data():
            obj.errorCode = proto.get_fixed_int(2)
        if proto.has_remaining_data() and payload[proto.offset] == ord('#'):
            proto.get_filler(1)
            obj.sqlState = proto.get_fixed_str(5)
        obj.errorMessage = proto.get_eop_str()

        return obj
