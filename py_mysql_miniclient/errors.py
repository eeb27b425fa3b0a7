# coding=utf-8
from pymysql import err


class TransportError(err.OperationalError):
    """
    The connection could not be opened, or the stream closed or timed out
    in the middle of a packet.
    """


class ProtocolError(err.InternalError):
    """
    Malformed packet, invalid length encoding or sequence id mismatch.
    The stream is out of sync and must not be used again.
    """


class ServerError(err.DatabaseError):
    """
    The server answered with an ERR packet
    """

    def __init__(self, errno=0, sqlstate="HY000", message=""):
        super(ServerError, self).__init__(errno, message)
        self.errno = errno
        self.sqlstate = sqlstate
        self.message = message

    def __str__(self):
        return "(%s, %s) %s" % (self.errno, self.sqlstate, self.message)

    @classmethod
    def from_packet(cls, err_packet):
        return cls(err_packet.errorCode, err_packet.sqlState, err_packet.errorMessage)


class HandshakeError(ServerError):
    pass


class QueryError(ServerError):
    pass


class UnsupportedOperation(err.NotSupportedError):
    pass
