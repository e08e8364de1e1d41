import hashlib
import io

from fastapi import UploadFile

from app.services import UploadStorage

CONTENT = b"Alice,1111,100,Credit,,\n"


async def test_stage_records_size_and_checksum(tmp_path):
    storage = UploadStorage(tmp_path / "uploads")

    staged = await storage.stage(UploadFile(file=io.BytesIO(CONTENT), filename="../march report.csv"))

    assert staged.original_name == "../march report.csv"
    assert staged.path.parent == tmp_path / "uploads"
    assert staged.path.name.endswith("-march-report.csv")
    assert staged.size_bytes == len(CONTENT)
    assert staged.checksum_sha256 == hashlib.sha256(CONTENT).hexdigest()
    assert staged.read_text() == CONTENT.decode()


async def test_clear_removes_staged_files(tmp_path):
    storage = UploadStorage(tmp_path / "uploads")
    await storage.stage(UploadFile(file=io.BytesIO(CONTENT), filename="a.csv"))
    await storage.stage(UploadFile(file=io.BytesIO(CONTENT), filename="b.csv"))

    assert storage.clear() == 2
    assert list((tmp_path / "uploads").iterdir()) == []
    assert UploadStorage(tmp_path / "missing").clear() == 0
