import copy

import pytest
from fastapi.testclient import TestClient

from db import UpstreamServiceError
from dependencies import (
    get_completion_client,
    get_document_store,
    get_identity_provider,
    get_realtime_store,
)
from main import app


class FakeRealtimeStore:
    """In-memory stand-in for the Realtime Database, addressed by slash paths."""

    def __init__(self, tree=None):
        self.tree = copy.deepcopy(tree or {})
        self.failing = set()  # path prefixes that raise
        self._pushed = 0

    @staticmethod
    def _parts(path):
        return [p for p in path.split("/") if p]

    def _check(self, path):
        for prefix in self.failing:
            if path == prefix or path.startswith(prefix + "/"):
                raise UpstreamServiceError(f"Realtime Database unavailable: {path}")

    def _node(self, parts):
        node = self.tree
        for p in parts:
            node = node.setdefault(p, {})
        return node

    def read(self, path):
        self._check(path)
        node = self.tree
        for p in self._parts(path):
            if not isinstance(node, dict) or p not in node:
                return None
            node = node[p]
        return copy.deepcopy(node)

    def write(self, path, value):
        self._check(path)
        parts = self._parts(path)
        self._node(parts[:-1])[parts[-1]] = copy.deepcopy(value)

    def update(self, path, values):
        self._check(path)
        self._node(self._parts(path)).update(copy.deepcopy(values))

    def push(self, path, value):
        self._check(path)
        self._pushed += 1
        key = f"-N{self._pushed:05d}"
        self.write(f"{path}/{key}", value)
        return key


class FakeDocumentStore:
    def __init__(self, collections=None):
        self.collections = copy.deepcopy(collections or {})
        self.fail = False

    def list_collection(self, name):
        if self.fail:
            raise UpstreamServiceError("Firestore unavailable")
        return copy.deepcopy(self.collections.get(name, []))


class FakeIdentityProvider:
    def __init__(self):
        self.accounts = {}

    def create_account(self, email, password, display_name=None):
        if any(a["email"] == email for a in self.accounts.values()):
            raise UpstreamServiceError("The user with the provided email already exists (EMAIL_EXISTS).")
        if len(password) < 6:
            raise UpstreamServiceError("Invalid password string. Password must be a string at least 6 characters long.")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[uid] = {"email": email, "password": password, "display_name": display_name}
        return uid


class FakeCompletionClient:
    def __init__(self, reply="Engineering has 2 employees."):
        self.reply = reply
        self.error = None
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def realtime():
    return FakeRealtimeStore()


@pytest.fixture
def documents():
    return FakeDocumentStore()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def completion():
    return FakeCompletionClient()


@pytest.fixture
def client(realtime, documents, identity, completion):
    app.dependency_overrides[get_realtime_store] = lambda: realtime
    app.dependency_overrides[get_document_store] = lambda: documents
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_completion_client] = lambda: completion
    # No context manager: the lifespan (real Firebase / Gemini init) is skipped
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def company_tree():
    """Realtime Database contents for a small company."""
    return {
        "users": {
            "Engineering": {
                "u1": {"fullName": "Asha", "email": "asha@x.com", "department": "Engineering",
                       "role": "ENGINEER", "accountType": "EMPLOYEE", "status": "ACTIVE"},
                "u2": {"fullName": "Ben", "email": "ben@x.com", "department": "Engineering",
                       "role": "ENGINEER", "accountType": "EMPLOYEE", "status": "INACTIVE"},
            },
            "Sales": {
                "u3": {"fullName": "Cai", "email": "cai@x.com", "department": "Sales",
                       "role": "EMPLOYEE", "status": "ACTIVE"},
            },
            "HR": {
                "h1": {"fullName": "Hana", "email": "hana@x.com", "department": "HR",
                       "role": "HR", "accountType": "HR", "status": "ACTIVE"},
            },
        },
        "attendance": {
            "u1": {"2024-05-01": {"uid": "u1", "date": "2024-05-01", "status": "PRESENT", "checkIn": 1}},
            "u3": {"2024-05-01": {"uid": "u3", "date": "2024-05-01", "status": "PRESENT", "checkIn": 2}},
        },
        "leaves": {
            "L1": {"uid": "u1", "from": "2024-06-01", "to": "2024-06-03", "reason": "Trip",
                   "status": "PENDING", "createdAt": 10},
        },
    }


@pytest.fixture
def company_documents():
    return {
        "sales": [{"id": "s1", "amount": 1200}, {"id": "s2", "amount": 300.5}, {"id": "s3"}],
        "projects": [{"id": "p1", "name": "Atlas"}, {"id": "p2", "name": "Borealis"}],
        "performance": [{"id": "r1", "uid": "u1", "score": 4}],
    }
