# school_elections/importer.py

import csv
import logging
from dataclasses import dataclass, field

from school_elections import db
from school_elections.seed import add_voter_if_absent
from school_elections.security.input_validator import InputValidator

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    imported: int = 0
    skipped: int = 0
    invalid: list[int] = field(default_factory=list)


def read_voter_rows(path):
    """Yield (line_number, dni, name, course) from a dni,name,course CSV."""
    with open(path, newline='', encoding='utf-8-sig') as f:
        for line_number, row in enumerate(csv.reader(f), start=1):
            cells = [cell.strip() for cell in row]
            if not any(cells):
                continue
            cells += [''] * (3 - len(cells))
            yield line_number, cells[0], cells[1], cells[2]


def import_voters(path, validator=None):
    validator = validator or InputValidator()
    report = ImportReport()
    try:
        for line_number, dni, name, course in read_voter_rows(path):
            if not validator.validate_dni(dni) or not validator.validate_course(course):
                report.invalid.append(line_number)
                logger.warning("Line %s skipped: bad dni or course", line_number)
                continue
            if add_voter_if_absent(dni, validator.sanitize_string(name), course):
                report.imported += 1
            else:
                report.skipped += 1
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Imported %s voters (%s already present, %s invalid)",
                report.imported, report.skipped, len(report.invalid))
    return report
