"""Google Drive storage backend: one JSON document per record."""

import json
import logging
from contextlib import contextmanager
from datetime import date
from io import BytesIO
from typing import Any, Dict, Iterator, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload
from pydantic import ValidationError

from fitmatch.exceptions import StorageError
from fitmatch.memory.base import BaseStorage
from fitmatch.models.daily_log import DailyLog, daily_log_id
from fitmatch.models.user_profile import UserProfile
from fitmatch.models.workout_log import WorkoutRecord

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def _quote(value: str) -> str:
    """Escape a literal for a Drive `q=` query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


@contextmanager
def _drive_errors(action: str) -> Iterator[None]:
    try:
        yield
    except HttpError as e:
        logger.error(f"Google Drive request failed while {action}: {e}", exc_info=True)
        raise StorageError(f"Google Drive request failed while {action}") from e
    except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
        logger.error(f"Google Drive unreachable while {action}: {e}", exc_info=True)
        raise StorageError(f"Google Drive unreachable while {action}") from e
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Corrupt document on Google Drive while {action}: {e}", exc_info=True)
        raise StorageError(f"Corrupt document on Google Drive while {action}") from e


class GoogleDriveStorage(BaseStorage):
    """Store profiles, daily logs and workout records in the user's Drive."""

    APP_FOLDER_NAME = "FitMatch"
    DAILY_LOGS_FOLDER = "daily_logs"
    WORKOUT_RECORDS_FOLDER = "workout_records"

    def __init__(self, credentials: Optional[Credentials] = None, service: Any = None) -> None:
        """
        Initialize Google Drive storage.

        Args:
            credentials: Google OAuth 2.0 credentials used to build the Drive client
            service: Prebuilt Drive v3 client; takes precedence over credentials
        """
        if service is None and credentials is None:
            raise StorageError("GoogleDriveStorage needs credentials or a Drive service")
        self.credentials = credentials
        self.service = service or build("drive", "v3", credentials=credentials)
        self.app_folder_id: Optional[str] = None

    # --- Drive helpers ----------------------------------------------------

    def _find(self, query: str, fields: str = "files(id, name)") -> List[Dict[str, Any]]:
        """Run a files.list query and follow nextPageToken until every page is read."""
        files: List[Dict[str, Any]] = []
        params = {"q": query, "spaces": "drive", "fields": f"nextPageToken, {fields}"}
        while True:
            results = self.service.files().list(**params).execute()
            files.extend(results.get("files", []))
            page_token = results.get("nextPageToken")
            if not page_token:
                return files
            params["pageToken"] = page_token

    def _ensure_app_folder(self) -> str:
        """
        Ensure the FitMatch folder exists on the user's Drive.

        Returns:
            Folder ID of the app folder
        """
        if self.app_folder_id:
            return self.app_folder_id

        query = f"name='{self.APP_FOLDER_NAME}' and mimeType='{FOLDER_MIME_TYPE}' and trashed=false"
        files = self._find(query)
        if files:
            self.app_folder_id = files[0]["id"]
            return self.app_folder_id

        folder_metadata = {"name": self.APP_FOLDER_NAME, "mimeType": FOLDER_MIME_TYPE}
        folder = self.service.files().create(body=folder_metadata, fields="id").execute()
        self.app_folder_id = folder.get("id")
        logger.info(f"Created app folder {self.APP_FOLDER_NAME} ({self.app_folder_id})")
        return self.app_folder_id

    def _subfolder(self, folder_name: Optional[str], create: bool) -> Optional[str]:
        """
        Resolve a subfolder of the app folder.

        Args:
            folder_name: Subfolder name, or None for the app folder itself
            create: Create the subfolder when missing

        Returns:
            Folder ID, or None when missing and ``create`` is False
        """
        parent_id = self._ensure_app_folder()
        if not folder_name:
            return parent_id

        query = (
            f"name='{_quote(folder_name)}' and "
            f"'{parent_id}' in parents and "
            f"mimeType='{FOLDER_MIME_TYPE}' and "
            "trashed=false"
        )
        files = self._find(query)
        if files:
            return files[0]["id"]
        if not create:
            return None

        folder_metadata = {"name": folder_name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        folder = self.service.files().create(body=folder_metadata, fields="id").execute()
        return folder.get("id")

    def save_json(self, filename: str, data: Dict[str, Any], subfolder: Optional[str] = None) -> str:
        """
        Create or overwrite a JSON document.

        Returns:
            File ID on Google Drive
        """
        folder_id = self._subfolder(subfolder, create=True)
        existing_files = self._find(f"name='{_quote(filename)}' and '{folder_id}' in parents and trashed=false")

        json_data = json.dumps(data, ensure_ascii=False, indent=2)
        media = MediaIoBaseUpload(BytesIO(json_data.encode("utf-8")), mimetype="application/json")

        if existing_files:
            file_id = existing_files[0]["id"]
            self.service.files().update(fileId=file_id, media_body=media).execute()
            return file_id

        file_metadata = {"name": filename, "parents": [folder_id]}
        file = self.service.files().create(body=file_metadata, media_body=media, fields="id").execute()
        return file.get("id")

    def load_json(self, filename: str, subfolder: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Load a JSON document.

        Returns:
            Parsed document, or None if the file doesn't exist
        """
        folder_id = self._subfolder(subfolder, create=False)
        if folder_id is None:
            return None

        files = self._find(f"name='{_quote(filename)}' and '{folder_id}' in parents and trashed=false", "files(id)")
        if not files:
            return None
        return self._download(files[0]["id"])

    def load_all_json(self, subfolder: str, prefix: str = "") -> List[Dict[str, Any]]:
        """Load every JSON document in a subfolder whose name starts with ``prefix``."""
        folder_id = self._subfolder(subfolder, create=False)
        if folder_id is None:
            return []

        query = f"'{folder_id}' in parents and trashed=false"
        if prefix:
            query += f" and name contains '{_quote(prefix)}'"
        files = self._find(query, "files(id, name)")
        return [self._download(f["id"]) for f in files if f["name"].startswith(prefix)]

    def _download(self, file_id: str) -> Dict[str, Any]:
        request = self.service.files().get_media(fileId=file_id)
        fh = BytesIO()
        downloader = MediaIoBaseDownload(fh, request)

        done = False
        while not done:
            _, done = downloader.next_chunk()

        fh.seek(0)
        return json.loads(fh.read().decode("utf-8"))

    # --- storage primitives -----------------------------------------------

    @staticmethod
    def _profile_filename(user_id: str) -> str:
        return f"profile_{user_id}.json"

    def _read_profile(self, user_id: str) -> Optional[UserProfile]:
        with _drive_errors(f"reading profile of {user_id}"):
            data = self.load_json(self._profile_filename(user_id))
            return UserProfile.model_validate(data) if data else None

    def _write_profile(self, profile: UserProfile) -> None:
        with _drive_errors(f"saving profile of {profile.user_id}"):
            self.save_json(self._profile_filename(profile.user_id), profile.model_dump(mode="json"))

    def _read_daily_log(self, user_id: str, day: date) -> Optional[DailyLog]:
        with _drive_errors(f"reading daily log {daily_log_id(user_id, day)}"):
            data = self.load_json(f"{daily_log_id(user_id, day)}.json", self.DAILY_LOGS_FOLDER)
            return DailyLog.model_validate(data) if data else None

    def _write_daily_log(self, log: DailyLog) -> None:
        with _drive_errors(f"saving daily log {log.log_id}"):
            # diet_score is derived, not stored
            data = log.model_dump(mode="json", exclude={"diet_score"})
            self.save_json(f"{log.log_id}.json", data, self.DAILY_LOGS_FOLDER)

    def _read_daily_logs(self, user_id: str) -> List[DailyLog]:
        with _drive_errors(f"listing daily logs of {user_id}"):
            documents = self.load_all_json(self.DAILY_LOGS_FOLDER, prefix=f"{user_id}_")
            logs = [DailyLog.model_validate(data) for data in documents]
            return [log for log in logs if log.user_id == user_id]

    def _write_workout_record(self, record: WorkoutRecord) -> None:
        with _drive_errors(f"saving workout record {record.record_id}"):
            self.save_json(
                f"{record.record_id}.json", record.model_dump(mode="json"), self.WORKOUT_RECORDS_FOLDER
            )

    def _read_workout_records(self, user_id: str) -> List[WorkoutRecord]:
        with _drive_errors(f"listing workout records of {user_id}"):
            documents = self.load_all_json(self.WORKOUT_RECORDS_FOLDER, prefix=f"{user_id}_")
            records = [WorkoutRecord.model_validate(data) for data in documents]
            return [r for r in records if r.user_id == user_id]
