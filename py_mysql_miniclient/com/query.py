# coding=utf-8
import logging

from py_mysql_miniclient.errors import ProtocolError, QueryError
from py_mysql_miniclient.packet.column_definition import ColumnDefinition
from py_mysql_miniclient.packet.query import Query
from py_mysql_miniclient.packet.text_row import TextRow
from py_mysql_miniclient.protocol.eof import EOF
from py_mysql_miniclient.protocol.err import ERR
from py_mysql_miniclient.protocol.ok import OK
from py_mysql_miniclient.protocol.packet import is_eof, is_err, is_ok
from py_mysql_miniclient.protocol.proto import Proto
from py_mysql_miniclient.result import QueryResult

logger = logging.getLogger('py_mysql_miniclient')


def _read_response(stream):
    """
    Read the next packet of the cycle, raising QueryError for ERR packets
    """
    packet = stream.read()
    if is_err(packet.payload):
        error = ERR.loadFromPacket(packet.payload)
        logger.warning("Query error: %s %s %s" % (error.errorCode, error.sqlState, error.errorMessage))
        raise QueryError.from_packet(error)
    return packet.payload


def execute_query(stream, sql):
    """
    Send a COM_QUERY and decode the text protocol response.

    https://dev.mysql.com/doc/internals/en/com-query-response.html

    The response is one of
        ERR
        OK
        column count, column definitions, EOF, rows, EOF

    The sql text is sent as given.
    """
    stream.reset()
    stream.write(Query(sql))
    logger.debug("query: %s" % sql)

    payload = _read_response(stream)

    if is_ok(payload):
        ok = OK.loadFromPacket(payload)
        logger.debug("OK: %s affected rows" % ok.affectedRows)
        return QueryResult(affected_rows=ok.affectedRows, last_insert_id=ok.lastInsertId)

    column_count = Proto(payload).get_lenenc_int()
    if not column_count:
        raise ProtocolError("invalid column count in query response: %r" % (payload,))

    columns = []
    for _ in range(column_count):
        payload = _read_response(stream)
        columns.append(ColumnDefinition.loadFromPacket(payload).toColumnDef())

    payload = _read_response(stream)
    if not is_eof(payload):
        raise ProtocolError("EOF expected after %d column definitions, got %r" % (column_count, payload))

    rows = []
    while True:
        payload = _read_response(stream)
        if is_eof(payload):
            eof = EOF.loadFromPacket(payload)
            break
        rows.append(TextRow.loadFromPacket(payload, column_count).values)

    logger.debug("%d columns, %d rows, %d warnings" % (column_count, len(rows), eof.warnings))
    return QueryResult(columns, rows)
