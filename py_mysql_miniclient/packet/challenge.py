# coding=utf-8

from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class Challenge(Packet):
    """
    Initial Handshake Packet, protocol version 10

    https://dev.mysql.com/doc/internals/en/connection-phase-packets.html#packet-Protocol::Handshake

    1              [0a] protocol version
    string[NUL]    server version
    4              connection id
    string[8]      auth-plugin-data-part-1
    1              [00] filler
    2              capability flags (lower 2 bytes)
    1              character set
    2              status flags
    2              capability flags (upper 2 bytes)
    1              length of auth-plugin-data
    string[10]     reserved (all [00])
    string[13]     auth-plugin-data-part-2
    string[NUL]    auth-plugin name
    """
    __slots__ = ('protocolVersion', 'serverVersion', 'connectionId',
                 'challenge1', 'capabilityFlags', 'characterSet',
                 'statusFlags', 'challenge2', 'authPluginDataLength',
                 'authPluginName',
                 ) + Packet.__slots__

    def __init__(self):
        super(Challenge, self).__init__()
        self.protocolVersion = 0x0a
        self.serverVersion = ''
        self.connectionId = 0
        self.challenge1 = b''
        self.capabilityFlags = Flags.CLIENT_PROTOCOL_41
        self.characterSet = 0
        self.statusFlags = 0
        self.challenge2 = b''
        self.authPluginDataLength = 0
        self.authPluginName = ''

    def setCapabilityFlag(self, flag):
        self.capabilityFlags |= flag

    def hasCapabilityFlag(self, flag):
        return ((self.capabilityFlags & flag) == flag)

    @property
    def authData(self):
        """
        The 20 byte scramble. Part 2 may carry a terminator or a 21st byte
        """
        return (self.challenge1 + self.challenge2)[:Flags.SCRAMBLE_LENGTH]

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(1, self.protocolVersion))
        payload.extend(Proto.build_null_str(self.serverVersion))
        payload.extend(Proto.build_fixed_int(4, self.connectionId))
        payload.extend(Proto.build_fixed_str(Flags.AUTH_DATA_PART1_LENGTH, self.challenge1))
        payload.extend(Proto.build_filler(1))
        payload.extend(Proto.build_fixed_int(2, self.capabilityFlags & 0xffff))
        payload.extend(Proto.build_fixed_int(1, self.characterSet))
        payload.extend(Proto.build_fixed_int(2, self.statusFlags))
        payload.extend(Proto.build_fixed_int(2, self.capabilityFlags >> 16))
        payload.extend(Proto.build_fixed_int(1, self.authPluginDataLength))
        payload.extend(Proto.build_filler(10))
        payload.extend(Proto.build_fixed_str(Flags.AUTH_DATA_PART2_LENGTH, self.challenge2))
        payload.extend(Proto.build_null_str(self.authPluginName))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        obj = Challenge()
        proto = Proto(payload)

        obj.protocolVersion = proto.get_fixed_int(1)
        obj.serverVersion = proto.get_null_str()
        obj.connectionId = proto.get_fixed_int(4)
        obj.challenge1 = proto.get_fixed_bytes(Flags.AUTH_DATA_PART1_LENGTH)
        proto.get_filler(1)
        obj.capabilityFlags = proto.get_fixed_int(2)
        obj.characterSet = proto.get_fixed_int(1)
        obj.statusFlags = proto.get_fixed_int(2)
        obj.setCapabilityFlag(proto.get_fixed_int(2) << 16)
        obj.authPluginDataLength = proto.get_fixed_int(1)
        proto.get_filler(10)
        obj.challenge2 = proto.get_fixed_bytes(Flags.AUTH_DATA_PART2_LENGTH)
        # some servers send 13 bytes of data and then the terminator
        if proto.has_remaining_data() and proto.packet[proto.offset] == 0:
            proto.get_filler(1)

        # Servers without CLIENT_PLUGIN_AUTH stop after part 2
        if proto.has_remaining_data():
            obj.authPluginName = proto.get_null_str()

        return obj


__TEST_PACKETS__ = [
    # 5.6.4-m7-log
    [
        '50 00 00 00 0a 35 2e 36',
        '2e 34 2d 6d 37 2d 6c 6f',
        '67 00 56 0a 00 00 52 42',
        '33 76 7a 26 47 72 00 ff',
        'ff 08 02 00 0f c0 15 00',
        '00 00 00 00 00 00 00 00',
        '00 2b 79 44 26 2f 5a 5a',
        '33 30 35 5a 47 00 6d 79',
        '73 71 6c 5f 6e 61 74 69',
        '76 65 5f 70 61 73 73 77',
        '6f 72 64 00            ',
    ],
]
