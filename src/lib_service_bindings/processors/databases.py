"""Relational database processors (JDBC and R2DBC destinations).

Each table publishes ``username``/``password``, composes a URL from
``host``/``port``/``database`` and then lets an explicit ``jdbc-url`` /
``r2dbc-url`` entry override the composed one (later rule wins).
"""

from __future__ import annotations

from ..application.processor import MappingProcessor
from ..application.rules import DatabaseUrl, DriverClass, ProtocolChoice, Rename

DATASOURCE = "spring.datasource"
R2DBC = "spring.r2dbc"

MYSQL_PROTOCOL = ProtocolChoice(
    component="org.mariadb.r2dbc.MariadbConnection",
    present="mariadb",
    absent="mysql",
)
"""MariaDB's R2DBC driver rejects the ``mysql`` scheme; use ``mariadb`` when it is present."""

MYSQL_DRIVERS = ("org.mariadb.jdbc.Driver", "com.mysql.cj.jdbc.Driver")


def _database(
    type: str,  # noqa: A002
    *,
    jdbc_template: str,
    r2dbc_template: str,
    protocol: str | ProtocolChoice = "",
    drivers: tuple[str, ...] = (),
) -> MappingProcessor:
    rules = [
        Rename("username", f"{DATASOURCE}.username"),
        Rename("password", f"{DATASOURCE}.password"),
        DatabaseUrl(f"{DATASOURCE}.url", jdbc_template, protocol),
        Rename("jdbc-url", f"{DATASOURCE}.url"),
    ]
    if drivers:
        rules.append(DriverClass(f"{DATASOURCE}.driver-class-name", drivers))
    rules += [
        Rename("password", f"{R2DBC}.password"),
        DatabaseUrl(f"{R2DBC}.url", r2dbc_template, protocol),
        Rename("username", f"{R2DBC}.username"),
        Rename("r2dbc-url", f"{R2DBC}.url"),
    ]
    return MappingProcessor(type, tuple(rules))


DB2 = _database(
    "db2",
    jdbc_template="jdbc:db2://{host}:{port}/{database}",
    r2dbc_template="r2dbc:db2://{host}:{port}/{database}",
    drivers=("com.ibm.db2.jcc.DB2Driver",),
)

MYSQL = _database(
    "mysql",
    jdbc_template="jdbc:{protocol}://{host}:{port}/{database}",
    r2dbc_template="r2dbc:{protocol}://{host}:{port}/{database}",
    protocol=MYSQL_PROTOCOL,
    drivers=MYSQL_DRIVERS,
)

ORACLE = _database(
    "oracle",
    jdbc_template="jdbc:oracle:thin:@{host}:{port}/{database}",
    r2dbc_template="r2dbc:oracle://{host}:{port}/{database}",
    drivers=("oracle.jdbc.OracleDriver",),
)

POSTGRESQL = _database(
    "postgresql",
    jdbc_template="jdbc:postgresql://{host}:{port}/{database}",
    r2dbc_template="r2dbc:postgresql://{host}:{port}/{database}",
    drivers=("org.postgresql.Driver",),
)

SQLSERVER = _database(
    "sqlserver",
    jdbc_template="jdbc:sqlserver://{host}:{port};database={database}",
    r2dbc_template="r2dbc:sqlserver://{host}:{port}/{database}",
    drivers=("com.microsoft.sqlserver.jdbc.SQLServerDriver",),
)
