from blob_uploader.models import FilePayload, UploadResult


def test_file_payload_from_path(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG....")
    payload = FilePayload.from_path(path)
    assert payload.name == "photo.png"
    assert payload.size == 8
    assert payload.type == "image/png"
    assert payload.body == b"\x89PNG...."


def test_file_payload_from_path_mime_override(tmp_path):
    path = tmp_path / "data.unknownext"
    path.write_bytes(b"abc")
    assert FilePayload.from_path(path).type is None
    assert FilePayload.from_path(path, mime="text/csv").type == "text/csv"


def test_upload_result_wire_names():
    result = UploadResult(filename="a.txt", local_path="blobs/a", download_url="/blobs/a")
    assert result.to_wire() == {
        "id": None,
        "filename": "a.txt",
        "localPath": "blobs/a",
        "downloadUrl": "/blobs/a",
        "mime": None,
        "size": None,
        "agent": None,
    }
