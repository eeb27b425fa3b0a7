# coding=utf-8
import collections

from py_mysql_miniclient.protocol.Flags import field_type_name


class ColumnDef(collections.namedtuple('ColumnDef', ['schema', 'table', 'name', 'type_code'])):
    __slots__ = ()

    @property
    def type_name(self):
        return field_type_name(self.type_code)


class QueryResult(object):
    """
    Columns and rows decoded from one query response.

    Row values are text or None for SQL NULL, one per column in column
    order. A statement answered with an OK packet has neither columns
    nor rows.

    Column and row numbers given to the accessors start at 1, column
    labels are matched case-insensitively.
    """
    __slots__ = ('columns', 'rows', 'affected_rows', 'last_insert_id')

    def __init__(self, columns=(), rows=(), affected_rows=0, last_insert_id=0):
        self.columns = tuple(columns)
        self.rows = [tuple(row) for row in rows]
        self.affected_rows = affected_rows
        self.last_insert_id = last_insert_id

    @property
    def column_count(self):
        return len(self.columns)

    @property
    def row_count(self):
        return len(self.rows)

    @property
    def has_result_set(self):
        return len(self.columns) > 0

    def column(self, index):
        if not 1 <= index <= len(self.columns):
            raise IndexError("column %d out of range 1..%d" % (index, len(self.columns)))
        return self.columns[index - 1]

    def column_name(self, index):
        return self.column(index).name

    def column_table(self, index):
        return self.column(index).table

    def column_type_name(self, index):
        return self.column(index).type_name

    def column_index(self, label):
        """
        1-based position of the first column named label
        """
        wanted = label.lower()
        for i, column in enumerate(self.columns):
            if column.name is not None and column.name.lower() == wanted:
                return i + 1
        raise KeyError(label)

    def value(self, row, column):
        if not 1 <= row <= len(self.rows):
            raise IndexError("row %d out of range 1..%d" % (row, len(self.rows)))
        if not isinstance(column, int):
            column = self.column_index(column)
        self.column(column)
        return self.rows[row - 1][column - 1]

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    def __eq__(self, other):
        if not isinstance(other, QueryResult):
            return NotImplemented
        return (self.columns, self.rows, self.affected_rows, self.last_insert_id) == \
            (other.columns, other.rows, other.affected_rows, other.last_insert_id)

    def __repr__(self):
        return "QueryResult(columns=%r, rows=%r)" % (self.columns, self.rows)
