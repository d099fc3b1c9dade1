"""
PostgreSQL Service - data access for every table.

Tables in this database:
1. admin_users   - Back-office operator accounts
2. users         - Candidates
3. jobs          - Job postings
4. applications  - One row per (user, job) pair
5. clients       - Hiring companies

Each service method runs exactly one parameterized statement through
execute_raw_sql(); there are no multi-statement transactions.
Lookups that find nothing return None so routes decide what "not found" means.
Routes receive services through the get_*_service dependencies, which lets
tests swap in in-memory implementations.
"""

import json
from typing import Optional, List, Dict, Any

from app.db.postgres import execute_raw_sql


def _first(rows: list) -> Optional[dict]:
    return rows[0] if rows else None


# ============================================================
# ADMIN USERS
# ============================================================

class AdminUserService:
    """Operator accounts. Created on registration, read on login."""

    def create(self, email: str, password_hash: str) -> dict:
        rows = execute_raw_sql(
            """
            INSERT INTO admin_users (email, password_hash)
            VALUES (:email, :password_hash)
            RETURNING id, email
            """,
            {"email": email, "password_hash": password_hash},
            conflict_message="Email already exists"
        )
        return rows[0]

    def get_by_email(self, email: str) -> Optional[dict]:
        rows = execute_raw_sql(
            "SELECT id, email, password_hash FROM admin_users WHERE email = :email",
            {"email": email}
        )
        # More than one row would mean the table lost its uniqueness guarantee
        return rows[0] if len(rows) == 1 else None


# ============================================================
# USERS (CANDIDATES)
# ============================================================

USER_COLUMNS = "id, full_name, email, phone, created_at"


class UserService:
    """Candidate accounts. password_hash is never selected back out."""

    def create(self, full_name: str, email: str, password_hash: str, phone: Optional[str]) -> dict:
        rows = execute_raw_sql(
            f"""
            INSERT INTO users (full_name, email, password_hash, phone)
            VALUES (:full_name, :email, :password_hash, :phone)
            RETURNING {USER_COLUMNS}
            """,
            {"full_name": full_name, "email": email, "password_hash": password_hash, "phone": phone},
            conflict_message="Email already exists"
        )
        return rows[0]

    def list(self) -> List[dict]:
        return execute_raw_sql(f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC")

    def get(self, user_id: int) -> Optional[dict]:
        return _first(execute_raw_sql(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = :id",
            {"id": user_id}
        ))

    def delete(self, user_id: int) -> Optional[int]:
        row = _first(execute_raw_sql(
            "DELETE FROM users WHERE id = :id RETURNING id",
            {"id": user_id}
        ))
        return row["id"] if row else None


# ============================================================
# JOBS
# ============================================================

class JobService:
    """Job postings. requirements is a TEXT[] column."""

    def list(self) -> List[dict]:
        return execute_raw_sql("SELECT * FROM jobs ORDER BY created_at DESC")

    def create(self, fields: Dict[str, Any]) -> dict:
        rows = execute_raw_sql(
            """
            INSERT INTO jobs (title, department, description, requirements, status, created_by)
            VALUES (:title, :department, :description, :requirements, :status, :created_by)
            RETURNING *
            """,
            fields
        )
        return rows[0]

    def get(self, job_id: int) -> Optional[dict]:
        return _first(execute_raw_sql("SELECT * FROM jobs WHERE id = :id", {"id": job_id}))

    def update(self, job_id: int, fields: Dict[str, Any]) -> Optional[dict]:
        """Partial update: a None value keeps the stored column."""
        params = {
            "title": fields.get("title"),
            "department": fields.get("department"),
            "description": fields.get("description"),
            "requirements": fields.get("requirements"),
            "status": fields.get("status"),
            "created_by": fields.get("created_by"),
            "id": job_id,
        }
        return _first(execute_raw_sql(
            """
            UPDATE jobs
               SET title = COALESCE(:title, title),
                   department = COALESCE(:department, department),
                   description = COALESCE(:description, description),
                   requirements = COALESCE(CAST(:requirements AS TEXT[]), requirements),
                   status = COALESCE(:status, status),
                   created_by = COALESCE(:created_by, created_by),
                   updated_at = now()
             WHERE id = :id
            RETURNING *
            """,
            params
        ))

    def delete(self, job_id: int) -> Optional[int]:
        row = _first(execute_raw_sql(
            "DELETE FROM jobs WHERE id = :id RETURNING id",
            {"id": job_id}
        ))
        return row["id"] if row else None


# ============================================================
# APPLICATIONS
# ============================================================

class ApplicationService:
    """Applications, always returned joined with display fields of the counterpart."""

    def list(self) -> List[dict]:
        return execute_raw_sql(
            """
            SELECT a.*, u.full_name, u.email, j.title AS job_title
            FROM applications a
            JOIN users u ON u.id = a.user_id
            JOIN jobs j ON j.id = a.job_id
            ORDER BY a.created_at DESC
            """
        )

    def get(self, application_id: int) -> Optional[dict]:
        return _first(execute_raw_sql(
            """
            SELECT a.*, u.full_name, u.email, j.title AS job_title
            FROM applications a
            JOIN users u ON u.id = a.user_id
            JOIN jobs j ON j.id = a.job_id
            WHERE a.id = :id
            """,
            {"id": application_id}
        ))

    def create(self, fields: Dict[str, Any]) -> dict:
        params = dict(fields)
        parsed = params.get("ai_parsed_data")
        params["ai_parsed_data"] = json.dumps(parsed) if parsed is not None else None
        rows = execute_raw_sql(
            """
            INSERT INTO applications
                (user_id, job_id, resume_url, cover_letter, status, ai_parsed_data, admin_notes)
            VALUES (:user_id, :job_id, :resume_url, :cover_letter, :status,
                    CAST(:ai_parsed_data AS JSONB), :admin_notes)
            RETURNING *
            """,
            params,
            conflict_message="User has already applied to this job"
        )
        return rows[0]

    def list_for_job(self, job_id: int) -> List[dict]:
        return execute_raw_sql(
            """
            SELECT a.*, u.full_name, u.email
            FROM applications a
            JOIN users u ON u.id = a.user_id
            WHERE a.job_id = :job_id
            ORDER BY a.created_at DESC
            """,
            {"job_id": job_id}
        )

    def list_for_user(self, user_id: int) -> List[dict]:
        return execute_raw_sql(
            """
            SELECT a.*, j.title AS job_title
            FROM applications a
            JOIN jobs j ON j.id = a.job_id
            WHERE a.user_id = :user_id
            ORDER BY a.created_at DESC
            """,
            {"user_id": user_id}
        )

    def latest_for_user(self, user_id: int) -> Optional[dict]:
        """Most recent application with its AI data and job title, used by the PDF export."""
        return _first(execute_raw_sql(
            """
            SELECT a.ai_parsed_data, a.status, a.created_at, j.title AS job_title
            FROM applications a
            JOIN jobs j ON j.id = a.job_id
            WHERE a.user_id = :user_id
            ORDER BY a.created_at DESC
            LIMIT 1
            """,
            {"user_id": user_id}
        ))


# ============================================================
# CLIENTS
# ============================================================

class ClientService:
    """
    Hiring companies.

    jobs_count counts jobs linked by client_id OR whose department equals the
    company name. The name fallback undercounts clients whose jobs use other
    department names and overcounts on accidental name collisions; it is kept
    as-is because existing job rows rely on it.
    """

    def list(self) -> List[dict]:
        return execute_raw_sql(
            """
            SELECT
                c.id,
                c.company,
                c.contact_person,
                c.email,
                c.created_at,
                (
                    SELECT count(1)
                    FROM jobs j
                    WHERE j.client_id = c.id
                       OR (j.department IS NOT NULL AND j.department = c.company)
                ) AS jobs_count
            FROM clients c
            ORDER BY c.created_at DESC
            """
        )

    def create(self, company: str, contact_person: Optional[str], email: Optional[str]) -> dict:
        rows = execute_raw_sql(
            """
            INSERT INTO clients (company, contact_person, email)
            VALUES (:company, :contact_person, :email)
            RETURNING *
            """,
            {"company": company, "contact_person": contact_person, "email": email},
            conflict_message="company already exists"
        )
        return rows[0]


# ============================================================
# FASTAPI DEPENDENCIES
# ============================================================

def get_admin_user_service() -> AdminUserService:
    return AdminUserService()


def get_user_service() -> UserService:
    return UserService()


def get_job_service() -> JobService:
    return JobService()


def get_application_service() -> ApplicationService:
    return ApplicationService()


def get_client_service() -> ClientService:
    return ClientService()
