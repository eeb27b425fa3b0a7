# coding=utf-8
import logging
import socket
from urllib.parse import urlsplit

from py_mysql_miniclient.auth.handshake import authenticate
from py_mysql_miniclient.com.query import execute_query
from py_mysql_miniclient.errors import ProtocolError, TransportError, UnsupportedOperation
from py_mysql_miniclient.lib.utils import normalize_query
from py_mysql_miniclient.protocol.stream import PacketStream

logger = logging.getLogger('py_mysql_miniclient')

URL_SCHEME = "pcsql"
DEFAULT_PORT = 40000
DEFAULT_CONNECT_TIMEOUT = 5.0


class ConnectionSettings(object):
    """
    Where and as whom to connect. The database name is kept for the
    caller, it is not sent to the server.
    """
    __slots__ = ('host', 'port', 'user', 'password', 'database', 'connect_timeout', 'scramble')

    def __init__(self, host='127.0.0.1', port=DEFAULT_PORT, user='', password='', database='',
                 connect_timeout=DEFAULT_CONNECT_TIMEOUT, scramble=False):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connect_timeout = connect_timeout
        self.scramble = scramble

    @classmethod
    def from_url(cls, url, user='', password='', **kwargs):
        """
        Parse pcsql://host[:port][/database], credentials may also be given
        in the url as user:password@host
        """
        parts = urlsplit(url)
        if parts.scheme != URL_SCHEME:
            raise ValueError("Not a %s:// url: %s" % (URL_SCHEME, url))
        if not parts.hostname:
            raise ValueError("No host in url: %s" % url)

        return cls(host=parts.hostname,
                   port=parts.port or DEFAULT_PORT,
                   user=parts.username or user,
                   password=parts.password or password,
                   database=parts.path.lstrip('/'),
                   **kwargs)

    @classmethod
    def from_config(cls, section):
        """
        Read settings from a configparser section
        """
        return cls(host=section.get("host", '127.0.0.1'),
                   port=section.getint("port", DEFAULT_PORT),
                   user=section.get("user", ''),
                   password=section.get("password", ''),
                   database=section.get("database", ''),
                   connect_timeout=section.getfloat("connect_timeout", DEFAULT_CONNECT_TIMEOUT),
                   scramble=section.getboolean("scramble", False))

    def __repr__(self):
        return "ConnectionSettings(host=%r, port=%r, user=%r, database=%r)" % (
            self.host, self.port, self.user, self.database)


class Connection(object):
    """
    One authenticated connection, running one query at a time.

    A transport or protocol failure leaves the stream unusable, so the
    connection closes itself. A server error on a query does not.
    """

    def __init__(self, settings, sock=None):
        self._settings = settings
        self._socket = sock if sock is not None else self._open_socket()
        self._file = self._socket.makefile('rwb')
        self._stream = PacketStream(self._file)
        self.server_greeting = None
        self.last_result = None

        try:
            self.server_greeting = authenticate(self._stream, settings.user, settings.password,
                                                settings.scramble)
        except Exception:
            self.close()
            raise

    def _open_socket(self):
        address = (self._settings.host, self._settings.port)
        logger.info("Connect to %s:%s" % address)
        try:
            sock = socket.create_connection(address, timeout=self._settings.connect_timeout)
        except OSError as e:
            raise TransportError("Can't connect to %s:%s: %s" % (address[0], address[1], e)) from e
        # only the connect is time bounded
        sock.settimeout(None)
        return sock

    @property
    def closed(self):
        return self._socket is None

    def close(self):
        if self._socket is None:
            return
        try:
            self._file.close()
        except OSError as e:
            logger.debug("Ignore error on close: %s" % e)
        self._socket.close()
        self._socket = None
        self._file = None
        self._stream = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def query(self, sql):
        """
        Run sql as given and return its QueryResult
        """
        if self._socket is None:
            raise TransportError("Connection is closed")
        try:
            return execute_query(self._stream, sql)
        except (TransportError, ProtocolError):
            logger.error("Connection to %s:%s is broken, closing it" % (self._settings.host, self._settings.port))
            self.close()
            raise

    def execute_query(self, sql):
        """
        Normalize sql, then run it
        """
        return self.query(normalize_query(sql))

    def execute(self, sql):
        """
        Run sql, return True when it produced a result set. The result
        is kept in last_result.
        """
        self.last_result = None
        result = self.execute_query(sql)
        self.last_result = result
        return result.has_result_set

    def execute_update(self, sql):
        raise UnsupportedOperation("Updates are not supported: %s" % sql)


def connect(settings=None, **kwargs):
    """
    Open a connection from ConnectionSettings, or from the keyword
    arguments ConnectionSettings takes
    """
    if settings is None:
        settings = ConnectionSettings(**kwargs)
    return Connection(settings)
