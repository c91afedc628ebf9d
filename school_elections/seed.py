# school_elections/seed.py

import logging
import re

from school_elections import db
from school_elections.database.models import AdminCode, Candidate, PollingStation, Voter
from school_elections.voting.ballots import generate_otp

logger = logging.getLogger(__name__)

STATION_CODES = ["MESA-1-2025", "MESA-2-2025", "MESA-3-2025", "MESA-4-2025"]

DEMO_VOTERS = [
    ("1001", "Ana Torres", "T3A"),
    ("1002", "Luis Pérez", "T3A"),
    ("1003", "Marta Díaz", "T3B"),
    ("1004", "Juan Gómez", "T3B"),
    ("1005", "Sofía Rojas", "T3C"),
    ("1006", "Carlos Ruiz", "T4A"),
    ("1007", "Daniela Melo", "T4A"),
    ("1008", "Esteban Gil", "T4B"),
    ("1009", "Valeria Sol", "T4B"),
    ("1010", "Diego León", "T4C"),
    ("1011", "Paula Arias", "T5A"),
    ("1012", "Camilo Lara", "T5A"),
    ("1013", "Nicolás Rey", "T5B"),
    ("1014", "Sara Cifuentes", "T5B"),
    ("1015", "Lina Medina", "T3A"),
    ("1016", "Tomás Silva", "T4C"),
    ("1017", "Juliana Mora", "T3C"),
    ("1018", "Felipe Ospina", "T4A"),
    ("1019", "Andrés Paz", "T5B"),
    ("1020", "Laura Mesa", "T5A"),
]

# (race, course, name, detail); course None means the whole school
DEMO_CANDIDATES = [
    ("rep", "T3A", "Camila Pardo", "Lista 1"),
    ("rep", "T3A", "Mateo Llano", "Lista 2"),
    ("rep", "T3B", "Valentina Roa", "Lista 3"),
    ("rep", "T3C", "Samuel Ortiz", "Lista 1"),
    ("rep", "T4A", "Isabella Niño", "Lista 2"),
    ("rep", "T4B", "Juanita Vega", "Lista 4"),
    ("rep", "T4C", "Santiago Melo", "Lista 1"),
    ("rep", "T5A", "María B.", "Lista 2"),
    ("rep", "T5B", "David C.", "Lista 3"),
    ("amb", "T3A", "Héctor M.", "Reciclaje"),
    ("amb", "T3B", "Elena A.", "Huerta"),
    ("amb", "T3C", "Kevin R.", "Energía"),
    ("amb", "T4A", "Sara Q.", "Agua"),
    ("amb", "T4B", "Laura P.", "Aseo"),
    ("amb", "T4C", "Brayan D.", "Reforestación"),
    ("amb", "T5A", "Nicole F.", "Campañas"),
    ("amb", "T5B", "Pedro Z.", "Ruido"),
    ("per", None, "Personería Lista A", ""),
    ("per", None, "Personería Lista B", ""),
]


def candidate_id(race, course, name):
    return re.sub(r'\s+', '_', f"{race}-{course or 'ALL'}-{name}")


def init_schema():
    db.create_all()
    logger.info("Schema ready on %s", db.engine.url.render_as_string(hide_password=True))


def seed_admin(code):
    if db.session.get(AdminCode, code) is None:
        db.session.add(AdminCode(code=code))


def seed_stations(codes=STATION_CODES):
    for i, code in enumerate(codes, start=1):
        if db.session.query(PollingStation).filter_by(code=code).first() is None:
            db.session.add(PollingStation(name=f"Mesa {i}", code=code, code_hash=""))


def add_voter_if_absent(dni, name, course):
    """Insert a voter with a fresh PIN unless the dni is already registered."""
    if db.session.get(Voter, dni) is not None:
        return False
    db.session.add(Voter(dni=dni, name=name, course=course, otp=generate_otp()))
    # flush so a repeated dni later in the same batch is seen as present
    db.session.flush()
    return True


def seed_candidates(rows=DEMO_CANDIDATES):
    for race, course, name, detail in rows:
        cid = candidate_id(race, course, name)
        if db.session.get(Candidate, cid) is None:
            db.session.add(Candidate(id=cid, race=race, name=name, detail=detail, course=course))


def seed_demo(admin_code, with_demo=True):
    """Create tables and load the admin code, stations, voters and candidates."""
    init_schema()
    seed_admin(admin_code)
    seed_stations()
    if with_demo:
        for dni, name, course in DEMO_VOTERS:
            add_voter_if_absent(dni, name, course)
        seed_candidates()
    db.session.commit()
    logger.info("Database initialised with example data")
