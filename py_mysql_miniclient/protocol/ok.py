#!/usr/bin/env python
# coding=utf-8

from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class OK(Packet):
    __slots__ = ('affectedRows', 'lastInsertId', 'statusFlags', 'warnings', 'info') + Packet.__slots__

    def __init__(self, affectedRows=0, lastInsertId=0, statusFlags=0, warnings=0, info=""):
        super(OK, self).__init__()
        self.affectedRows = affectedRows
        self.lastInsertId = lastInsertId
        self.statusFlags = statusFlags
        self.warnings = warnings
        self.info = info

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_byte(Flags.OK))
        payload.extend(Proto.build_lenenc_int(self.affectedRows))
        payload.extend(Proto.build_lenenc_int(self.lastInsertId))
        payload.extend(Proto.build_fixed_int(2, self.statusFlags))
        payload.extend(Proto.build_fixed_int(2, self.warnings))
        payload.extend(Proto.build_eop_str(self.info))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        """
        Only the header byte is mandatory, whatever follows is read
        as far as it goes.
        """
        obj = OK()
        proto = Proto(payload)

        proto.get_filler(1)
        if proto.has_remaining_data():
            obj.affectedRows = proto.get_lenenc_int() or 0
        if proto.has_remaining_data():
            obj.lastInsertId = proto.get_lenenc_int() or 0
        if len(payload) - proto.offset >= 4:
            obj.statusFlags = proto.get_fixed_int(2)
            obj.warnings = proto.get_fixed_int(2)
            obj.info = proto.get_eop_str()

        return obj
