#!/usr/bin/env python
# coding=utf-8

from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.packet import Packet
from py_mysql_miniclient.protocol.proto import Proto


class Response(Packet):
    """
    Handshake Response Packet 41, as this client sends it

    4              capability flags
    4              max-packet size
    1              character set
    string[23]     reserved (all [0])
    string[NUL]    username
    1              length of auth-response
    string[n]      auth-response
    string[NUL]    auth plugin name
    """
    __slots__ = ('capabilityFlags', 'maxPacketSize', 'characterSet',
                 'username', 'authResponse', 'pluginName') + Packet.__slots__

    def __init__(self):
        super(Response, self).__init__()
        self.capabilityFlags = Flags.CLIENT_CAPABILITIES
        self.maxPacketSize = 0
        self.characterSet = Flags.CLIENT_CHARSET
        self.username = ''
        self.authResponse = b''
        self.pluginName = Flags.AUTH_PLUGIN_NAME

    def hasCapabilityFlag(self, flag):
        return ((self.capabilityFlags & flag) == flag)

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(4, self.capabilityFlags))
        payload.extend(Proto.build_fixed_int(4, self.maxPacketSize))
        payload.extend(Proto.build_fixed_int(1, self.characterSet))
        payload.extend(Proto.build_filler(23))
        payload.extend(Proto.build_null_str(self.username))

        # An empty auth-response is the single length byte 0x00
        payload.extend(Proto.build_fixed_int(1, len(self.authResponse)))
        payload.extend(self.authResponse)

        payload.extend(Proto.build_null_str(self.pluginName))

        return payload

    @staticmethod
    def loadFromPacket(payload):
        obj = Response()
        proto = Proto(payload)

        obj.capabilityFlags = proto.get_fixed_int(4)
        obj.maxPacketSize = proto.get_fixed_int(4)
        obj.characterSet = proto.get_fixed_int(1)
        proto.get_filler(23)
        obj.username = proto.get_null_str()

        authResponseLen = proto.get_fixed_int(1)
        obj.authResponse = proto.get_fixed_bytes(authResponseLen)

        if obj.hasCapabilityFlag(Flags.CLIENT_PLUGIN_AUTH):
            obj.pluginName = proto.get_null_str()

        return obj
