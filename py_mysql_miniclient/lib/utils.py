import re

# Liveness probes some tools send, rewritten to a form every server answers
PROBE_QUERIES = {
    "select 1 from dual": "select 1",
    "values 1": "select 1",
}

_LEADING_COMMENT = re.compile(r'^/\*.*?\*/', re.S)


def normalize_query(query):
    """
    Strip leading block comments and one trailing semicolon, then map
    probe queries to "select 1"

    >>> normalize_query("/* ping */ SELECT 1 FROM DUAL;")
    'select 1'
    >>> normalize_query("select * from t1 ; ")
    'select * from t1'
    """
    if query is None:
        return ""

    query = query.strip()
    while query.startswith("/*"):
        match = _LEADING_COMMENT.match(query)
        if not match:
            break
        query = query[match.end():].strip()

    if query.endswith(";"):
        query = query[:-1].strip()

    return PROBE_QUERIES.get(query.lower(), query)
