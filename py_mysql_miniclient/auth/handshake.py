# coding=utf-8
import logging

from py_mysql_miniclient.errors import HandshakeError
from py_mysql_miniclient.packet.challenge import Challenge
from py_mysql_miniclient.packet.response import Response
from py_mysql_miniclient.protocol import Flags
from py_mysql_miniclient.protocol.err import ERR
from py_mysql_miniclient.protocol.packet import is_err
from py_mysql_miniclient.protocol.proto import scramble_native_password

logger = logging.getLogger('py_mysql_miniclient')


def authenticate(stream, user="", password="", scramble=False):
    """
    Run the connection phase on a freshly opened PacketStream.

    The server greeting is read, a Handshake Response 41 is sent at the
    sequence id following the greeting's, and the server's answer is
    checked for an ERR packet. No auth-switch or capability negotiation
    takes place.

    The auth-response is empty unless scramble is set and a password is
    given, in which case it is the mysql_native_password scramble.

    Returns the parsed greeting.
    """
    packet = stream.read_greeting()
    if is_err(packet.payload):
        error = ERR.loadFromPacket(packet.payload)
        logger.warning("Server refused the connection: %s %s %s" % (error.errorCode, error.sqlState,
                                                                    error.errorMessage))
        raise HandshakeError.from_packet(error)

    challenge = Challenge.loadFromPacket(packet.payload)
    if not challenge.hasCapabilityFlag(Flags.CLIENT_PROTOCOL_41):
        logger.warning("Server %s does not announce protocol 41" % challenge.serverVersion)
    logger.debug("Server greeting: version %s, connection id %s, capabilities 0x%08x, plugin %s" % (
        challenge.serverVersion, challenge.connectionId, challenge.capabilityFlags, challenge.authPluginName))

    response = Response()
    response.username = user or ""
    if scramble and password:
        response.authResponse = scramble_native_password(password, challenge.authData)
    stream.write(response)

    packet = stream.read()
    if is_err(packet.payload):
        error = ERR.loadFromPacket(packet.payload)
        logger.warning("Login failed for user %s: %s %s %s" % (response.username, error.errorCode,
                                                                error.sqlState, error.errorMessage))
        raise HandshakeError.from_packet(error)

    logger.info("Login as %s on %s, connection id %s" % (response.username, challenge.serverVersion,
                                                          challenge.connectionId))
    return challenge
