"""Pytest configuration and shared fixtures.

Backend behaviour comes from a small in-memory FastAPI app mounted through
httpx.ASGITransport, so tests run the real client code path.
"""

import copy
from typing import Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from heyteam.api_client import ApiClient
from heyteam.context import AppContext, Navigator
from heyteam.session import Session

BASE_URL = "http://test"

VALID_ROSTER_STATUSES = ["confirmed", "declined", "maybe", "no_reply", "free"]


def make_contact(contact_id, first, last, phone="+15550000000", email=None):
    return {"id": contact_id, "firstName": first, "lastName": last, "phone": phone, "email": email}


def make_job(job_id="J1", **fields):
    job = {
        "id": job_id,
        "name": "Downtown Construction Site",
        "location": "12 Main St",
        "startTime": "2030-03-04T09:00:00.000Z",
        "endTime": "2030-03-04T17:00:00.000Z",
        "notes": None,
        "requiredHeadcount": None,
        "departmentId": None,
        "isRecurring": False,
        "recurrencePattern": None,
        "skillRequirements": [],
        "availability": [],
    }
    job.update(fields)
    return job


class FakeBackend:
    """In-memory stand-in for the portal API"""

    def __init__(self):
        self.contacts = {
            "c1": make_contact("c1", "Ada", "Lovelace", email="ada@example.com"),
            "c2": make_contact("c2", "Grace", "Hopper"),
            "c3": make_contact("c3", "Alan", "Turing"),
        }
        self.jobs = {
            "J1": make_job(
                "J1",
                availability=[
                    {"id": "a1", "contactId": "c1", "status": "no_reply"},
                    {"id": "a2", "contactId": "c2", "status": "confirmed"},
                ],
            )
        }
        self.departments = [
            {"id": "d1", "name": "Warehouse", "description": None, "address": "1 Dock Rd"},
        ]
        self.department_contacts = {"d1": ["c2"]}
        self.templates = [
            {"id": "t1", "name": "Shift Reminder", "content": "See you tomorrow"},
            {"id": "t2", "name": "Job Invitation", "content": "Can you work {{jobName}}?"},
        ]
        self.messages = []
        self.sent_messages = []
        self.contact_id = "c1"
        self.contact_departments = []
        self.requests = []
        self.reject_with = None  # (status_code, body) returned for every mutation

    def add_job(self, job_id, **fields):
        self.jobs[job_id] = make_job(job_id, **fields)
        return self.jobs[job_id]

    def calls(self, method, path_prefix=""):
        return [r for r in self.requests if r[0] == method and r[1].startswith(path_prefix)]

    def roster(self, job_id):
        job = copy.deepcopy(self.jobs[job_id])
        job["availability"] = [
            {"id": a["id"], "status": a["status"], "contact": self.contacts[a["contactId"]]}
            for a in job["availability"]
        ]
        return job

    def job_view(self, job_id):
        job = copy.deepcopy(self.jobs[job_id])
        job.pop("availability")
        return job

    def find_availability(self, availability_id):
        for job in self.jobs.values():
            for record in job["availability"]:
                if record["id"] == availability_id:
                    return job, record
        return None, None

    def contact_entries(self, statuses=None):
        entries = []
        for job in self.jobs.values():
            for record in job["availability"]:
                if record["contactId"] != self.contact_id:
                    continue
                if statuses and record["status"] not in statuses:
                    continue
                entries.append(
                    {
                        "id": job["id"],
                        "name": job["name"],
                        "location": job["location"],
                        "startTime": job["startTime"],
                        "endTime": job["endTime"],
                        "notes": job["notes"],
                        "departmentId": job["departmentId"],
                        "availabilityStatus": record["status"],
                        "availabilityId": record["id"],
                        "createdAt": "2030-01-01T00:00:00.000Z",
                    }
                )
        return entries


def not_found(message):
    return JSONResponse(status_code=404, content={"message": message})


def build_app(backend: FakeBackend) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        backend.requests.append((request.method, request.url.path, dict(request.headers)))
        if request.method != "GET" and backend.reject_with:
            status_code, body = backend.reject_with
            return JSONResponse(status_code=status_code, content=body)
        return await call_next(request)

    @app.get("/api/jobs")
    async def list_jobs(departmentId: Optional[str] = None):
        jobs = []
        for job_id, job in backend.jobs.items():
            if departmentId and job["departmentId"] != departmentId:
                continue
            statuses = [a["status"] for a in job["availability"]]
            summary = backend.job_view(job_id)
            summary["availabilityCounts"] = {
                "confirmed": statuses.count("confirmed"),
                "maybe": statuses.count("maybe"),
                "declined": statuses.count("declined"),
                "noReply": statuses.count("no_reply"),
            }
            jobs.append(summary)
        return jobs

    @app.get("/api/contacts")
    async def list_contacts(departmentId: Optional[str] = None):
        if departmentId:
            return [backend.contacts[c] for c in backend.department_contacts.get(departmentId, [])]
        return [{**c, "status": "free"} for c in backend.contacts.values()]

    @app.get("/api/templates")
    async def list_templates():
        return backend.templates

    @app.get("/api/jobs/{job_id}/roster")
    async def get_roster(job_id: str):
        if job_id not in backend.jobs:
            return not_found("Job not found")
        return backend.roster(job_id)

    @app.patch("/api/jobs/{job_id}/availability/{availability_id}")
    async def update_availability(job_id: str, availability_id: str, body: dict):
        status = body.get("status")
        if status not in VALID_ROSTER_STATUSES:
            return JSONResponse(
                status_code=400,
                content={"message": f"Invalid status. Must be one of: {', '.join(VALID_ROSTER_STATUSES)}"},
            )
        if job_id not in backend.jobs:
            return not_found("Job not found")
        record = next((a for a in backend.jobs[job_id]["availability"] if a["id"] == availability_id), None)
        if record is None:
            return not_found("Availability record not found")
        record["status"] = status
        return record

    @app.get("/api/jobs/{job_id}")
    async def get_job(job_id: str):
        if job_id not in backend.jobs:
            return not_found("Job not found")
        return backend.job_view(job_id)

    @app.patch("/api/jobs/{job_id}")
    async def update_job(job_id: str, body: dict):
        if job_id not in backend.jobs:
            return not_found("Job not found")
        backend.jobs[job_id].update(body)
        return backend.job_view(job_id)

    @app.post("/api/availability")
    async def create_availability(body: dict):
        if body["contactId"] not in backend.contacts:
            return not_found("Contact not found")
        job = backend.jobs[body["jobId"]]
        record = {
            "id": f"a{sum(len(j['availability']) for j in backend.jobs.values()) + 1}",
            "contactId": body["contactId"],
            "status": body.get("status", "no_reply"),
        }
        job["availability"].append(record)
        return record

    @app.post("/api/send-message")
    async def send_message(body: dict):
        backend.sent_messages.append(body)
        return {"success": True, "queued": len(body["contactIds"])}

    @app.get("/api/departments")
    async def list_departments():
        return backend.departments

    @app.post("/api/departments")
    async def create_department(body: dict):
        if not body.get("name"):
            return JSONResponse(status_code=400, content={"message": "Department name is required"})
        department = {"id": f"d{len(backend.departments) + 1}", **body}
        backend.departments.append(department)
        return department

    @app.get("/api/messages/history")
    async def message_history():
        return backend.messages

    @app.get("/api/contact/invitations")
    async def contact_invitations():
        return {"invitations": backend.contact_entries(statuses=("no_reply", "maybe"))}

    @app.get("/api/contact/schedule")
    async def contact_schedule():
        entries = [{k: v for k, v in e.items() if k != "createdAt"} for e in backend.contact_entries()]
        upcoming = sorted(entries, key=lambda e: e["startTime"])
        return {"upcoming": upcoming, "past": []}

    @app.get("/api/contact/departments")
    async def contact_departments():
        return backend.contact_departments

    @app.patch("/api/contact/availability/{availability_id}")
    async def contact_availability(availability_id: str, body: dict):
        status = body.get("status")
        if status not in ("confirmed", "declined", "maybe"):
            return JSONResponse(
                status_code=400,
                content={"message": "Invalid status. Must be 'confirmed', 'declined', or 'maybe'"},
            )
        job, record = backend.find_availability(availability_id)
        if record is None or record["contactId"] != backend.contact_id:
            return not_found("Availability record not found")
        record["status"] = status
        return {"success": True, "status": status}

    @app.patch("/api/departments/{department_id}")
    async def update_department(department_id: str, body: dict):
        department = next((d for d in backend.departments if d["id"] == department_id), None)
        if department is None:
            return not_found("Department not found")
        department.update(body)
        return department

    @app.delete("/api/departments/{department_id}")
    async def delete_department(department_id: str):
        if not any(d["id"] == department_id for d in backend.departments):
            return not_found("Department not found")
        backend.departments = [d for d in backend.departments if d["id"] != department_id]
        return Response(status_code=204)

    return app


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def transport(backend):
    return httpx.ASGITransport(app=build_app(backend))


@pytest_asyncio.fixture
async def client(transport):
    session = Session(token="secret-token", cookie="sid=abc", user_type="admin")
    api = ApiClient(session=session, base_url=BASE_URL, transport=transport)
    yield api
    await api.aclose()


@pytest.fixture
def context(client):
    return AppContext(client=client, navigator=Navigator("/admin/jobs"))
