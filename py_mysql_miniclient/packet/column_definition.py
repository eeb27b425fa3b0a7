# coding=utf-8
from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto
from py_mysql_miniclient.result import ColumnDef


class ColumnDefinition(Packet):
    """
    https://dev.mysql.com/doc/internals/en/com-query-response.html#packet-Protocol::ColumnDefinition41

    lenenc_str     catalog
    lenenc_str     schema
    lenenc_str     table
    lenenc_str     org_table
    lenenc_str     name
    lenenc_str     org_name
    lenenc_int     length of fixed-length fields [0c]
    2              character set
    4              column length
    1              type
    2              flags
    1              decimals
    2              filler [00] [00]
    """
    __slots__ = ('catalog', 'schema', 'table', 'orgTable', 'name', 'orgName',
                 'characterSet', 'columnLength', 'columnType', 'flags',
                 'decimals') + Packet.__slots__

    def __init__(self, schema='', table='', name='', columnType=Flags.MYSQL_TYPE_VAR_STRING):
        super(ColumnDefinition, self).__init__()
        self.catalog = 'def'
        self.schema = schema
        self.table = table
        self.orgTable = table
        self.name = name
        self.orgName = name
        self.characterSet = Flags.CLIENT_CHARSET
        self.columnLength = 0
        self.columnType = columnType
        self.flags = 0
        self.decimals = 0

    def toColumnDef(self):
        return ColumnDef(self.schema, self.table, self.name, self.columnType)

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_lenenc_str(self.catalog))
        payload.extend(Proto.build_lenenc_str(self.schema))
        payload.extend(Proto.build_lenenc_str(self.table))
        payload.extend(Proto.build_lenenc_str(self.orgTable))
        payload.extend(Proto.build_lenenc_str(self.name))
        payload.extend(Proto.build_lenenc_str(self.orgName))
        payload.extend(Proto.build_lenenc_int(0x0c))
        payload.extend(Proto.build_fixed_int(2, self.characterSet))
        payload.extend(Proto.build_fixed_int(4, self.columnLength))
        payload.extend(Proto.build_fixed_int(1, self.columnType))
        payload.extend(Proto.build_fixed_int(2, self.flags))
        payload.extend(Proto.build_fixed_int(1, self.decimals))
        payload.extend(Proto.build_filler(2))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        obj = ColumnDefinition()
        proto = Proto(payload)

        obj.catalog = proto.get_lenenc_str()
        obj.schema = proto.get_lenenc_str()
        obj.table = proto.get_lenenc_str()
        obj.orgTable = proto.get_lenenc_str()
        obj.name = proto.get_lenenc_str()
        obj.orgName = proto.get_lenenc_str()
        proto.get_lenenc_int()
        obj.characterSet = proto.get_fixed_int(2)
        obj.columnLength = proto.get_fixed_int(4)
        obj.columnType = proto.get_fixed_int(1)
        obj.flags = proto.get_fixed_int(2)
        obj.decimals = proto.get_fixed_int(1)
        proto.get_filler(2)

        return obj
