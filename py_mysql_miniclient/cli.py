import configparser
import logging
import os
import sys

from py_mysql_miniclient.connection import ConnectionSettings, connect
from py_mysql_miniclient.errors import ServerError, TransportError
from py_mysql_miniclient.lib.log import init_logger

logger = logging.getLogger('py_mysql_miniclient')


def main(argv=None):
    """
    usage: python -m py_mysql_miniclient.cli [config file] [sql]
    """
    argv = sys.argv if argv is None else argv
    config = configparser.ConfigParser()
    conf_file = len(argv) > 1 and argv[1] or os.path.dirname(__file__) + "/example.conf"
    if not config.read(conf_file):
        logger.error("Can't read config file %s" % conf_file)
        return 1
    for section in ("Client", "Logging"):
        if not config.has_section(section):
            logger.error("No [%s] section in %s" % (section, conf_file))
            return 1
    sql = len(argv) > 2 and argv[2] or "select 1"

    init_logger(log_name="miniclient", level=config["Logging"].getint("level", logging.INFO),
                log_dir=config["Logging"].get("log_dir"))

    settings = ConnectionSettings.from_config(config["Client"])
    logger.info("Connect to %s:%s as %s" % (settings.host, settings.port, settings.user))

    try:
        with connect(settings) as conn:
            result = conn.execute_query(sql)
    except (ServerError, TransportError) as e:
        logger.error("Query failed: %s" % e)
        return 1

    if not result.has_result_set:
        logger.info("OK, %d rows affected" % result.affected_rows)
        return 0

    logger.info(" | ".join("%s.%s(%s)" % (c.table, c.name, c.type_name) for c in result.columns))
    for row in result:
        logger.info(" | ".join("NULL" if v is None else v for v in row))
    logger.info("%d rows in set" % result.row_count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
