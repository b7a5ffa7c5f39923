"""
Point the app at a throw-away SQLite file before anything imports
``onefit.db``, then build the schema and the built-in catalog once.
"""
import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="onefit-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_tmp, 'onefit.db')}"
os.environ["SEED_DEFAULTS"] = "false"

from onefit.db import Base, SessionLocal, engine  # noqa: E402
from onefit import models  # noqa: E402,F401
from onefit.seed import seed_defaults  # noqa: E402

Base.metadata.create_all(bind=engine)
with SessionLocal() as _db:
    seed_defaults(_db)
