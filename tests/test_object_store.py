"""
Object Store Uploader Tests
Unit tests for GCS upload with service account credentials
"""
import base64
import json

import pytest
from unittest.mock import MagicMock, Mock, patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from submission_relay.exceptions import UploadError
from submission_relay.models import ServiceAccountCredential
from submission_relay.object_store import GCSUploader, create_storage_client


SERVICE_ACCOUNT = {"type": "service_account", "project_id": "relay-project", "private_key": "k"}
CREDENTIAL_BLOB = base64.b64encode(json.dumps(SERVICE_ACCOUNT).encode()).decode()


class TestGCSUploader:
    """Test upload flow with a mocked storage client"""

    def setup_method(self):
        """Setup mocked client factory"""
        self.client = MagicMock()
        self.blob = self.client.bucket.return_value.blob.return_value
        self.client_factory = Mock(return_value=self.client)
        self.uploader = GCSUploader(client_factory=self.client_factory)

    def test_upload_writes_fixed_object_name(self):
        """Content should be written to uploaded-file.txt in the bucket"""
        location = self.uploader.upload(b"PK\x03\x04", CREDENTIAL_BLOB, "submissions")

        assert location == "gs://submissions/uploaded-file.txt"
        self.client.bucket.assert_called_once_with("submissions")
        self.client.bucket.return_value.blob.assert_called_once_with("uploaded-file.txt")
        self.blob.upload_from_string.assert_called_once_with(b"PK\x03\x04")

    def test_upload_passes_content_type(self):
        """Content type should be forwarded when known"""
        self.uploader.upload(b"data", CREDENTIAL_BLOB, "submissions", content_type="application/zip")

        self.blob.upload_from_string.assert_called_once_with(b"data", content_type="application/zip")

    def test_client_scoped_to_credential_project(self):
        """Client factory should receive the decoded credential"""
        self.uploader.upload(b"data", CREDENTIAL_BLOB, "submissions")

        credential = self.client_factory.call_args[0][0]
        assert isinstance(credential, ServiceAccountCredential)
        assert credential.project_id == "relay-project"

    def test_custom_object_name(self):
        """Object name should be configurable"""
        uploader = GCSUploader(object_name="latest.zip", client_factory=self.client_factory)

        location = uploader.upload(b"data", CREDENTIAL_BLOB, "submissions")

        assert location == "gs://submissions/latest.zip"

    def test_raw_json_credential(self):
        """Raw JSON credential should be accepted"""
        self.uploader.upload(b"data", json.dumps(SERVICE_ACCOUNT), "submissions")

        self.blob.upload_from_string.assert_called_once()

    def test_decode_failure_does_not_write(self):
        """Credential decode failure should raise UploadError before any client is built"""
        with pytest.raises(UploadError):
            self.uploader.upload(b"data", "%%%not-a-credential%%%", "submissions")

        self.client_factory.assert_not_called()
        self.blob.upload_from_string.assert_not_called()

    def test_auth_failure_raises_upload_error(self):
        """Client construction errors should become UploadError"""
        self.client_factory.side_effect = ValueError("Could not deserialize key data")

        with pytest.raises(UploadError, match="Could not deserialize key data"):
            self.uploader.upload(b"data", CREDENTIAL_BLOB, "submissions")

    def test_write_failure_raises_upload_error(self):
        """Write errors should become UploadError"""
        self.blob.upload_from_string.side_effect = Exception("403 Forbidden: bucket access denied")

        with pytest.raises(UploadError, match="403 Forbidden"):
            self.uploader.upload(b"data", CREDENTIAL_BLOB, "submissions")


class TestCreateStorageClient:
    """Test real client construction wiring"""

    @patch("submission_relay.object_store.storage.Client")
    @patch("submission_relay.object_store.service_account.Credentials.from_service_account_info")
    def test_client_uses_service_account_info(self, mock_from_info, mock_client):
        """Client should be built from service account info and project id"""
        credential = ServiceAccountCredential(project_id="relay-project", info=SERVICE_ACCOUNT)

        client = create_storage_client(credential)

        mock_from_info.assert_called_once_with(SERVICE_ACCOUNT)
        mock_client.assert_called_once_with(
            project="relay-project", credentials=mock_from_info.return_value
        )
        assert client is mock_client.return_value
