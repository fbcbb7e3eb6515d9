#!/usr/bin/env python
"""
Create the Snowflake tables used by the Legal Value Score API.

Tables:
  ASSESSMENTS       - one flattened row per submission (score columns for every variant)
  EMAIL_SEQUENCES   - queued follow-up emails
  ANALYTICS_EVENTS  - funnel events

Usage:
    python -m legal_value_score.scripts.setup_snowflake --dry-run
    python -m legal_value_score.scripts.setup_snowflake
    python -m legal_value_score.scripts.setup_snowflake --tables ASSESSMENTS
"""

import argparse
import logging
import sys
from typing import Dict, Iterable, List

from snowflake.connector.errors import DatabaseError

from legal_value_score.core.exceptions import RepositoryException
from legal_value_score.scoring.variants import VARIANTS, ScoringVariant
from legal_value_score.services.snowflake import get_snowflake_connection

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def score_columns(variants: Iterable[ScoringVariant]) -> List[str]:
    """Per-category score and value-potential columns across all variants, deduplicated."""
    columns: List[str] = []
    for variant in variants:
        for category in variant.categories:
            columns.append(f"{category}_score")
        for table in (variant.value_buckets or {}).values():
            columns.append(f"value_potential_{table.key}")
        if variant.is_monetized:
            columns.append("value_potential_total")
    return list(dict.fromkeys(columns))


def assessments_ddl(variants: Iterable[ScoringVariant]) -> str:
    dynamic = ",\n".join(f"    {column.upper()} INTEGER" for column in score_columns(variants))
    return f"""CREATE TABLE IF NOT EXISTS ASSESSMENTS (
    ID VARCHAR(36) PRIMARY KEY,
    CREATED_AT TIMESTAMP_TZ NOT NULL,
    VARIANT VARCHAR(20) NOT NULL,
    PERSONA VARCHAR(30) NOT NULL,
    ANSWERS VARCHAR,
    EMAIL VARCHAR(255),
    FIRST_NAME VARCHAR(100),
    LAST_NAME VARCHAR(100),
    COMPANY_NAME VARCHAR(255),
    JOB_TITLE VARCHAR(255),
    TOTAL_SCORE INTEGER NOT NULL,
{dynamic},
    TIER VARCHAR(30) NOT NULL,
    UTM_SOURCE VARCHAR(255),
    UTM_MEDIUM VARCHAR(255),
    UTM_CAMPAIGN VARCHAR(255),
    UTM_CONTENT VARCHAR(255),
    IP_ADDRESS VARCHAR(64),
    USER_AGENT VARCHAR(1000),
    REFERRER VARCHAR(1000),
    EMAIL_SENT BOOLEAN DEFAULT FALSE,
    EMAIL_SENT_AT TIMESTAMP_TZ
)"""


EMAIL_SEQUENCES_DDL = """CREATE TABLE IF NOT EXISTS EMAIL_SEQUENCES (
    ID VARCHAR(36) PRIMARY KEY,
    ASSESSMENT_ID VARCHAR(36) NOT NULL REFERENCES ASSESSMENTS(ID),
    EMAIL_NUMBER INTEGER NOT NULL,
    EMAIL_TYPE VARCHAR(50) NOT NULL,
    STATUS VARCHAR(20) NOT NULL DEFAULT 'pending',
    CREATED_AT TIMESTAMP_TZ NOT NULL,
    SENT_AT TIMESTAMP_TZ
)"""


ANALYTICS_EVENTS_DDL = """CREATE TABLE IF NOT EXISTS ANALYTICS_EVENTS (
    ID VARCHAR(36) PRIMARY KEY,
    EVENT_TYPE VARCHAR(50) NOT NULL,
    ASSESSMENT_ID VARCHAR(36),
    PROPERTIES VARCHAR,
    CREATED_AT TIMESTAMP_TZ NOT NULL
)"""


def build_statements() -> Dict[str, str]:
    """Table name -> CREATE statement, in creation order."""
    return {
        "ASSESSMENTS": assessments_ddl(VARIANTS.values()),
        "EMAIL_SEQUENCES": EMAIL_SEQUENCES_DDL,
        "ANALYTICS_EVENTS": ANALYTICS_EVENTS_DDL,
    }


def create_tables(statements: Dict[str, str]) -> None:
    conn = get_snowflake_connection()
    try:
        cursor = conn.cursor()
        try:
            for table, ddl in statements.items():
                logger.info(f"Creating {table}...")
                cursor.execute(ddl)
            conn.commit()
        finally:
            cursor.close()
    finally:
        conn.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create Legal Value Score tables in Snowflake")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the DDL without connecting to Snowflake",
    )
    parser.add_argument(
        "--tables",
        default="all",
        help="Comma-separated subset of ASSESSMENTS,EMAIL_SEQUENCES,ANALYTICS_EVENTS (default: all)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    statements = build_statements()

    if args.tables.lower() != "all":
        wanted = [t.strip().upper() for t in args.tables.split(",") if t.strip()]
        unknown = [t for t in wanted if t not in statements]
        if unknown:
            logger.error(f"Unknown table(s): {', '.join(unknown)}")
            return 2
        statements = {t: ddl for t, ddl in statements.items() if t in wanted}

    if args.dry_run:
        for ddl in statements.values():
            print(f"{ddl};\n")
        return 0

    try:
        create_tables(statements)
    except (RepositoryException, DatabaseError) as e:
        logger.error(f"Setup failed: {e}")
        return 1

    logger.info(f"{'='*60}")
    logger.info(f"Created {len(statements)} table(s): {', '.join(statements)}")
    logger.info(f"{'='*60}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
