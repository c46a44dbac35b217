import os
import tempfile

# Settings are read at import time, point them at throwaway resources first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIRECTORY"] = tempfile.mkdtemp(prefix="hobbyhub-uploads-")
os.environ["R2_ENDPOINT"] = ""
os.environ["R2_ACCESS_KEY_ID"] = ""
os.environ["R2_SECRET_ACCESS_KEY"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from app.core.mailer import Mailer, get_mailer
from app.core.storage import R2Storage, get_media_storage
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app


class FakeStorage(R2Storage):
    """Keeps uploads in memory"""

    def __init__(self):
        super().__init__(client=object())
        self.client = None
        self.public_url = "https://media.test"
        self.objects = {}
        self.deleted = []

    def upload_bytes(self, content, filename, content_type, prefix):
        key = f"{prefix}/{len(self.objects)}-{filename}"
        self.objects[key] = content
        return f"{self.public_url}/{key}"

    def delete_file(self, url):
        self.deleted.append(url)
        key = self.key_from_url(url)
        return self.objects.pop(key, None) is not None


class FakeMailer(Mailer):
    def __init__(self, fail=False):
        super().__init__(host="smtp.test", port=25, sender="noreply@test")
        self.fail = fail
        self.sent = []

    def send(self, to, subject, body):
        if self.fail:
            raise ConnectionError("SMTP down")
        self.sent.append({"to": to, "subject": subject, "body": body})
        return True


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(db, storage, mailer):
    app.dependency_overrides[get_media_storage] = lambda: storage
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
