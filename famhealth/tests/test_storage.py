from famhealth.services import storage


def test_store_user_upload_layout(upload_dir):
    path = storage.store_user_upload("user-1", b"abc", "Report.PDF")
    user_part, filename = path.split("/")
    assert user_part == "user-1"
    stamp, ext = filename.split(".")
    assert stamp.isdigit()
    assert ext == "pdf"
    assert (upload_dir / path).read_bytes() == b"abc"


def test_default_extension_and_unique_names(upload_dir):
    first = storage.store_user_upload("user-1", b"a", None)
    second = storage.store_user_upload("user-1", b"b", "noext")
    assert first.endswith(".bin")
    assert second.endswith(".bin")
    assert first != second


def test_public_url_and_delete(upload_dir):
    path = storage.store_user_upload("user-1", b"x", "scan.png")
    assert storage.public_url(path) == f"{storage.FILES_BASE_URL}/{path}"
    assert storage.public_url(None) is None
    assert storage.delete_upload(path) is True
    assert not (upload_dir / path).exists()
    assert storage.delete_upload(path) is False
