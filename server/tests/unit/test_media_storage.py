import pytest
from unittest.mock import Mock
from app.services.media_storage import MediaStorage


@pytest.fixture
def minio_client():
    client = Mock()
    client.bucket_exists.return_value = False
    return client


class TestMediaStorage:
    """Тесты работы с внешним хранилищем фото (MinIO замокан)"""

    def test_upload_creates_bucket_once(self, minio_client):
        storage = MediaStorage(minio_client, "photos", "http://localhost:9000/")

        storage.upload_photo(1, b"abc", "me.png", "image/png")
        storage.upload_photo(1, b"def", "me2.png", "image/png")

        minio_client.make_bucket.assert_called_once_with("photos")
        assert minio_client.put_object.call_count == 2

    def test_upload_returns_url_and_public_id(self, minio_client):
        storage = MediaStorage(minio_client, "photos", "http://localhost:9000/")

        result = storage.upload_photo(7, b"abc", "Me.PNG", "image/png")

        assert result.public_id.startswith("user_photos/7/")
        assert result.public_id.endswith(".png")
        assert result.url == f"http://localhost:9000/photos/{result.public_id}"

        args, kwargs = minio_client.put_object.call_args
        assert args == ("photos", result.public_id)
        assert kwargs["length"] == 3
        assert kwargs["content_type"] == "image/png"

    def test_upload_defaults(self, minio_client):
        minio_client.bucket_exists.return_value = True
        storage = MediaStorage(minio_client, "photos", "http://cdn")

        result = storage.upload_photo(3, b"abc")

        minio_client.make_bucket.assert_not_called()
        assert result.public_id.endswith(".jpg")
        assert minio_client.put_object.call_args.kwargs["content_type"] == "image/jpeg"

    def test_delete_photo(self, minio_client):
        storage = MediaStorage(minio_client, "photos", "http://cdn")

        storage.delete_photo("user_photos/1/x.jpg")

        minio_client.remove_object.assert_called_once_with("photos", "user_photos/1/x.jpg")
