import logging
import sqlite3
from datetime import date
from pathlib import Path

from BackEnd.core.clock import format_time
from BackEnd.core.errors import PersistenceError, UnknownSession
from BackEnd.core.paths import db_path

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"

log = logging.getLogger("timeforge.store")


class SessionStore:
	"""One row per timer session in time_records, behind a single shared connection."""

	def __init__(self, path=None):
		self.path = str(path or db_path())
		self._conn = None

	def open(self):
		"""Open SQLite connection and ensure schema is applied."""
		if self._conn is not None:
			return self
		try:
			conn = sqlite3.connect(self.path)
			conn.row_factory = sqlite3.Row
			with open(SCHEMA_PATH, encoding="utf-8") as f:
				conn.executescript(f.read())
			self._migrate(conn)
		except sqlite3.Error as e:
			raise PersistenceError(f"Cannot open session store at {self.path}: {e}") from e
		self._conn = conn
		log.info("Session store opened at %s", self.path)
		return self

	def close(self):
		if self._conn is not None:
			self._conn.close()
			self._conn = None
			log.info("Session store closed")

	def __enter__(self):
		return self.open()

	def __exit__(self, *exc):
		self.close()

	@property
	def is_open(self) -> bool:
		return self._conn is not None

	def _migrate(self, conn):
		# Databases written before time was grouped by workspace lack the column.
		cur = conn.execute("PRAGMA table_info(time_records)")
		cols = {r["name"] for r in cur.fetchall()}
		if "workspace_id" not in cols:
			conn.execute("ALTER TABLE time_records ADD COLUMN workspace_id TEXT")
			conn.commit()
			log.info("Added workspace_id column to time_records")

	def _connection(self):
		if self._conn is None:
			raise PersistenceError("Session store is not open")
		return self._conn

	def _execute(self, sql, params=()):
		conn = self._connection()
		try:
			with conn:
				return conn.execute(sql, params)
		except sqlite3.Error as e:
			raise PersistenceError(str(e)) from e

	def _query(self, sql, params=()):
		conn = self._connection()
		try:
			return conn.execute(sql, params).fetchall()
		except sqlite3.Error as e:
			raise PersistenceError(str(e)) from e

	def create_session(self, day, start_time, workspace_id) -> int:
		"""Insert an open session row and return its id."""
		cur = self._execute(
			"INSERT INTO time_records (day, start_time, workspace_id) VALUES (?, ?, ?)",
			(day, start_time, workspace_id),
		)
		log.debug("Created session %s for %s at %s %s", cur.lastrowid, workspace_id, day, start_time)
		return cur.lastrowid

	def record_elapsed(self, session_id, seconds) -> bool:
		"""Write the final seconds_elapsed once. Unknown or finalised ids are logged, not raised."""
		try:
			self._finalise(session_id, int(seconds))
		except UnknownSession as e:
			log.warning("Elapsed time not recorded: %s", e)
			return False
		log.info("Recorded %ss for session %s", int(seconds), session_id)
		return True

	def _finalise(self, session_id, seconds):
		if session_id is None:
			raise UnknownSession(f"session was never created; {seconds}s lost")
		cur = self._execute(
			"UPDATE time_records SET seconds_elapsed=? WHERE id=? AND seconds_elapsed IS NULL",
			(seconds, session_id),
		)
		if cur.rowcount == 0:
			raise UnknownSession(f"no open session with id {session_id!r}; {seconds}s lost")

	def active_session(self):
		"""Return dict for the latest open session (seconds_elapsed IS NULL), or None."""
		rows = self._query(
			"SELECT id, day, start_time, workspace_id FROM time_records WHERE seconds_elapsed IS NULL ORDER BY id DESC LIMIT 1"
		)
		return dict(rows[0]) if rows else None

	def total_seconds_for_workspace(self, workspace_id, year) -> int:
		rows = self._query(
			"""
			SELECT COALESCE(SUM(seconds_elapsed), 0) AS total FROM time_records
			WHERE workspace_id=? AND substr(day, 1, 4)=?
			""",
			(workspace_id, f"{int(year):04d}"),
		)
		return int(rows[0]["total"]) if rows else 0

	def per_workspace_totals_for_day(self, day):
		"""[(workspace_id, human total)] for one day, ordered by workspace."""
		rows = self._query(
			"""
			SELECT workspace_id, COALESCE(SUM(seconds_elapsed), 0) AS total FROM time_records
			WHERE day=? GROUP BY workspace_id ORDER BY workspace_id
			""",
			(day,),
		)
		return [(r["workspace_id"], format_time(r["total"])) for r in rows]

	def daily_totals_for_year(self, year):
		"""[(day, seconds)] for days of year that have recorded time."""
		rows = self._query(
			"""
			SELECT day, SUM(seconds_elapsed) AS total FROM time_records
			WHERE substr(day, 1, 4)=? AND seconds_elapsed IS NOT NULL
			GROUP BY day ORDER BY day
			""",
			(f"{int(year):04d}",),
		)
		return [(r["day"], int(r["total"])) for r in rows]

	def year_boundary(self):
		"""(min_year, max_year) over all sessions; current year for both when empty."""
		rows = self._query("SELECT MIN(substr(day, 1, 4)) AS lo, MAX(substr(day, 1, 4)) AS hi FROM time_records")
		this_year = date.today().year
		if not rows or rows[0]["lo"] is None:
			return this_year, this_year
		return int(rows[0]["lo"]), int(rows[0]["hi"])
