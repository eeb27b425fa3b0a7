# coding=utf-8
from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class Query(Packet):
    """
    https://dev.mysql.com/doc/internals/en/com-query.html

    1              [03] COM_QUERY
    string[EOF]    the query the server shall execute
    """
    __slots__ = ('query',) + Packet.__slots__

    def __init__(self, query=''):
        super(Query, self).__init__()
        self.query = query

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_byte(Flags.COM_QUERY))
        payload.extend(Proto.build_eop_str(self.query))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        obj = Query()
        proto = Proto(payload)

        proto.get_filler(1)
        obj.query = proto.get_eop_str()

        return obj
