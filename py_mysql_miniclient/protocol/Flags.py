#!/usr/bin/env python
# coding=utf-8

from pymysql.charset import charset_by_id
from pymysql.constants import CLIENT, COMMAND, FIELD_TYPE

# Command types
COM_QUERY                               = COMMAND.COM_QUERY

# Packet headers
OK                                      = 0x00
ERR                                     = 0xff
EOF                                     = 0xfe
NULL                                    = 0xfb

# Length encoded int prefixes
LENENC_INT_2                            = 0xfc
LENENC_INT_3                            = 0xfd
LENENC_INT_8                            = 0xfe

# An EOF packet is 0xfe + warnings(2) + status(2), anything longer is data
EOF_MAX_LENGTH                          = 5

MAX_PACKET_PAYLOAD                      = 0xffffff
PACKET_HEADER_LENGTH                    = 4

CLIENT_LONG_PASSWORD                    = CLIENT.LONG_PASSWORD
CLIENT_LONG_FLAG                        = CLIENT.LONG_FLAG
CLIENT_PROTOCOL_41                      = CLIENT.PROTOCOL_41
CLIENT_SECURE_CONNECTION                = CLIENT.SECURE_CONNECTION
CLIENT_PLUGIN_AUTH                      = CLIENT.PLUGIN_AUTH

# The only capabilities this client implements
CLIENT_CAPABILITIES                     = (CLIENT_LONG_PASSWORD |
                                           CLIENT_LONG_FLAG |
                                           CLIENT_PROTOCOL_41 |
                                           CLIENT_SECURE_CONNECTION |
                                           CLIENT_PLUGIN_AUTH)

CS_utf8mb4_general_ci                   = 45
CLIENT_CHARSET                          = CS_utf8mb4_general_ci
CLIENT_ENCODING                         = charset_by_id(CLIENT_CHARSET).encoding

MYSQL_TYPE_VAR_STRING                   = FIELD_TYPE.VAR_STRING

AUTH_PLUGIN_NAME                      = "mysql_native_password"

# Length of the random string sent by the server on handshake
AUTH_DATA_PART1_LENGTH                  = 8
AUTH_DATA_PART2_LENGTH                  = 13
SCRAMBLE_LENGTH                         = 20

_HEADER_NAMES = {
    OK: "OK",
    ERR: "ERR",
    EOF: "EOF",
    NULL: "LOCAL_INFILE",
}

# CHAR and INTERVAL are aliases of TINY and ENUM
_FIELD_TYPE_NAMES = dict((getattr(FIELD_TYPE, _name), _name)
                         for _name in dir(FIELD_TYPE)
                         if _name.isupper() and _name not in ("CHAR", "INTERVAL"))


def header_name(val):
    return _HEADER_NAMES.get(val, "")


def field_type_name(type_code):
    return _FIELD_TYPE_NAMES.get(type_code, "UNKNOWN")
