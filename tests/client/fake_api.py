"""In-memory stand-in for the REST API, served through httpx.MockTransport."""

import json
import re
import uuid

import httpx

TIMESTAMP = "2024-01-01T00:00:00Z"


class FakeApi:
    """Just enough of the REST surface for the controller."""

    def __init__(self):
        self.projects = {}
        self.notes = {}
        self.gate = None
        # Methods held by the gate; empty holds every request
        self.gated = set()
        self.fail = set()
        self.requests = []

    def add_project(self, name):
        project = {"id": str(uuid.uuid4()), "name": name, "createdAt": TIMESTAMP, "updatedAt": TIMESTAMP}
        self.projects[project["id"]] = project
        return project

    def add_note(self, project_id, content, status="BACKLOG", color="YELLOW"):
        note = {
            "id": str(uuid.uuid4()),
            "content": content,
            "color": color,
            "status": status,
            "projectId": project_id,
            "userId": None,
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
        }
        self.notes[note["id"]] = note
        return note

    def _project_body(self, project):
        notes = [n for n in self.notes.values() if n["projectId"] == project["id"]]
        return {**project, "notes": notes}

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if self.gate is not None and (not self.gated or request.method in self.gated):
            await self.gate.wait()
        if (request.method, request.url.path) in self.fail or request.method in self.fail:
            return httpx.Response(500, json={"message": "Internal Server Error"})

        path = request.url.path
        body = json.loads(request.content) if request.content else None

        if path == "/projects" and request.method == "GET":
            data = [self._project_body(p) for p in reversed(list(self.projects.values()))]
            return httpx.Response(200, json={"data": data, "hasMore": False})
        if path == "/projects" and request.method == "POST":
            existing = next((p for p in self.projects.values() if p["name"] == body["name"]), None)
            project = existing or self.add_project(body["name"])
            return httpx.Response(201, json=self._project_body(project))
        if path == "/users" and request.method == "GET":
            return httpx.Response(200, json={"data": [], "hasMore": False})
        if path == "/notes" and request.method == "POST":
            existing = next(
                (
                    n
                    for n in self.notes.values()
                    if n["content"] == body["content"] and n["projectId"] == body["projectId"]
                ),
                None,
            )
            note = existing or self.add_note(
                body["projectId"], body["content"], body["status"], body["color"]
            )
            return httpx.Response(201, json=note)

        match = re.fullmatch(r"/notes/project/([^/]+)", path)
        if match:
            notes = [n for n in self.notes.values() if n["projectId"] == match.group(1)]
            return httpx.Response(200, json=list(reversed(notes)))

        match = re.fullmatch(r"/(projects|notes)/([^/]+)", path)
        if match:
            store = self.projects if match.group(1) == "projects" else self.notes
            record = store.get(match.group(2))
            if record is None:
                return httpx.Response(404, json={"message": "Not found"})
            if request.method == "DELETE":
                del store[record["id"]]
                return httpx.Response(204)
            if request.method == "PATCH":
                if "content" in body:
                    clash = next(
                        (
                            n
                            for n in self.notes.values()
                            if n["content"] == body["content"]
                            and n["projectId"] == record["projectId"]
                            and n["id"] != record["id"]
                        ),
                        None,
                    )
                    if clash:
                        return httpx.Response(200, json=clash)
                record.update(body)
            return httpx.Response(200, json=record)

        return httpx.Response(404, json={"message": f"No route for {path}"})
