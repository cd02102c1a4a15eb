"""S3Drive: a bucket mounted as a hierarchical drive."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Optional

from s3drive.auth import AuthInfo
from s3drive.controller import S3Controller
from s3drive.errors import InvalidArgumentError, InvalidStateError, ReadOnlyError
from s3drive.filetypes import ExtensionRegistry, default_registry
from s3drive.hierarchy import DEFAULT_MAX_WORKERS, HierarchyEmulator
from s3drive.models import CheckpointModel, ContentEntry, CreateOptions, DriveIdentity, SaveOptions
from s3drive.notify import ChangeEvent, Signal, SwitchEvent
from s3drive.paths import DriveLocation, basename, format_root, normalize_path, split_ext, strip_drive_name
from s3drive.state import DriveState, DriveStateStore
from s3drive.util.time import now_utc, to_rfc3339

logger = logging.getLogger(__name__)

DEFAULT_PRESIGN_EXPIRES_IN: int = 3600
BASE_URL_TEMPLATE: str = "https://s3.amazonaws.com/{name}"


class DriveStatus(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"
    DISPOSED = "DISPOSED"


class S3Drive:
    """
    A bucket (optionally narrowed to a root prefix) exposed as a drive.

    Notes:
        - Paths are relative to the root; "<name>:" or "<name>/" qualifiers
          are accepted and stripped.
        - Each operation works on a snapshot of bucket + root taken when it
          starts; a concurrent switch() affects only later operations.
        - Every successful mutation emits a ChangeEvent on `file_changed`.
          Failed operations emit nothing.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        registry: Optional[ExtensionRegistry] = None,
        state_store: Optional[DriveStateStore] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        max_retries: int = 0,
        presign_expires_in: int = DEFAULT_PRESIGN_EXPIRES_IN,
    ) -> None:
        controller = S3Controller(auth_info, max_retries=max_retries)
        self._setup(
            controller,
            auth_info.bucket,
            auth_info.root,
            registry=registry,
            state_store=state_store,
            max_workers=max_workers,
            presign_expires_in=presign_expires_in,
        )
        self.activate()

    @classmethod
    def from_controller(
        cls,
        controller: S3Controller,
        name: str,
        *,
        root: str = "",
        registry: Optional[ExtensionRegistry] = None,
        state_store: Optional[DriveStateStore] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        presign_expires_in: int = DEFAULT_PRESIGN_EXPIRES_IN,
        activate: bool = True,
    ) -> "S3Drive":
        """Create a drive with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._setup(
            controller,
            name,
            root,
            registry=registry,
            state_store=state_store,
            max_workers=max_workers,
            presign_expires_in=presign_expires_in,
        )
        if activate:
            obj.activate()
        return obj

    def _setup(
        self,
        controller: S3Controller,
        name: str,
        root: str,
        *,
        registry: Optional[ExtensionRegistry],
        state_store: Optional[DriveStateStore],
        max_workers: int,
        presign_expires_in: int,
    ) -> None:
        if not name or not isinstance(name, str):
            raise InvalidArgumentError("bucket name must be a non-empty string")
        if presign_expires_in <= 0:
            raise InvalidArgumentError("presign_expires_in must be > 0")
        if max_workers < 1:
            raise InvalidArgumentError("max_workers must be >= 1", details={"max_workers": max_workers})

        self._controller = controller
        self._emulator = HierarchyEmulator(
            controller,
            registry if registry is not None else default_registry(),
            max_workers=max_workers,
        )
        self._state_store = state_store
        self._presign_expires_in = presign_expires_in
        self._lock = threading.RLock()
        self._status = DriveStatus.UNINITIALIZED

        saved = state_store.load() if state_store is not None else None
        if saved is not None:
            logger.info("restoring drive state bucket=%s root=%r", saved.bucket, saved.root)
            name, root = saved.bucket, saved.root
        self._identity = DriveIdentity(name=name, root=normalize_path(root))

        self.file_changed: Signal[ChangeEvent] = Signal("file_changed")
        self.bucket_switched: Signal[SwitchEvent] = Signal("bucket_switched")
        self.disposed: Signal[S3Drive] = Signal("disposed")

    # ----------------------------
    # Lifecycle
    # ----------------------------
    @property
    def status(self) -> DriveStatus:
        return self._status

    @property
    def is_disposed(self) -> bool:
        return self._status is DriveStatus.DISPOSED

    def activate(self) -> None:
        """
        Look up the bucket region and validate the root.

        An invalid root is replaced by "" (bucket top level) without raising.
        """
        with self._lock:
            if self._status is DriveStatus.DISPOSED:
                raise InvalidStateError("Drive is disposed")
            name = self._identity.name
            candidate = self._identity.root

        region = self._controller.bucket_region(name)
        root = format_root(self._controller, name, candidate)

        with self._lock:
            self._identity.region = region
            self._identity.root = root
            self._identity.creation_date = to_rfc3339(now_utc())
            self._status = DriveStatus.ACTIVE
        logger.info("drive active bucket=%s root=%r region=%s", name, root, region)

    def dispose(self) -> None:
        """Release the drive. Emits `disposed` once; later calls are no-ops."""
        with self._lock:
            if self._status is DriveStatus.DISPOSED:
                return
            self._status = DriveStatus.DISPOSED

        logger.info("drive disposed bucket=%s", self._identity.name)
        self.disposed.emit(self)
        self.file_changed.clear()
        self.bucket_switched.clear()
        self.disposed.clear()

    # ----------------------------
    # Identity
    # ----------------------------
    @property
    def identity(self) -> DriveIdentity:
        with self._lock:
            ident = self._identity
            return DriveIdentity(
                name=ident.name,
                root=ident.root,
                region=ident.region,
                provider=ident.provider,
                creation_date=ident.creation_date,
            )

    @property
    def name(self) -> str:
        return self._identity.name

    @name.setter
    def name(self, value: str) -> None:
        self.switch(value, self.root)

    @property
    def root(self) -> str:
        return self._identity.root

    @root.setter
    def root(self, value: str) -> None:
        self.switch(self.name, value)

    @property
    def region(self) -> str:
        return self._identity.region

    @property
    def provider(self) -> str:
        return self._identity.provider

    @property
    def creation_date(self) -> str:
        return self._identity.creation_date

    @property
    def base_url(self) -> str:
        return BASE_URL_TEMPLATE.format(name=self._identity.name)

    def switch(self, bucket: str, root: Optional[str] = "") -> SwitchEvent:
        """
        Point the drive at another bucket and/or root.

        The root is validated against the new bucket and falls back to "" when
        it does not exist. The selection is persisted when a state store is
        configured; a failed save leaves the drive on its current bucket.
        """
        if not bucket or not isinstance(bucket, str):
            raise InvalidArgumentError("bucket name must be a non-empty string")
        self._require_active()

        region = self._controller.bucket_region(bucket)
        new_root = format_root(self._controller, bucket, root)

        if self._state_store is not None:
            self._state_store.save(DriveState(bucket=bucket, root=new_root))

        with self._lock:
            self._identity.name = bucket
            self._identity.root = new_root
            self._identity.region = region

        event = SwitchEvent(bucket=bucket, root=new_root, region=region)
        logger.info("drive switched bucket=%s root=%r", bucket, new_root)
        self.bucket_switched.emit(event)
        return event

    # ----------------------------
    # Contents
    # ----------------------------
    def get(self, path: str = "", *, content: bool = True) -> ContentEntry:
        """
        Return a directory listing or a file.

        Names without an extension are treated as directories. `content`
        controls whether a file body is fetched; directories always list
        their immediate children.
        """
        location, rel = self._resolve(path)
        if not rel or not split_ext(basename(rel))[1]:
            return self._emulator.list_directory(location, rel, name=self.name)
        return self._emulator.read_file(location, rel, content=content)

    def new_untitled(self, options: Optional[CreateOptions] = None) -> ContentEntry:
        options = options or CreateOptions()
        location, rel = self._resolve(options.path)
        resolved = CreateOptions(path=rel, type=options.type, ext=options.ext)

        entry = self._emulator.new_untitled(location, resolved)
        logger.info("created %s %r", options.type, entry.path)
        self.file_changed.emit(ChangeEvent("new", None, entry))
        return entry

    def save(self, path: str, options: SaveOptions) -> ContentEntry:
        location, rel = self._resolve(path)
        entry = self._emulator.save(location, rel, options)
        logger.info("saved %r", entry.path)
        self.file_changed.emit(ChangeEvent("save", None, entry))
        return entry

    def rename(self, old_path: str, new_path: str) -> ContentEntry:
        location, old_rel = self._resolve(old_path)
        new_rel = self._relative(location, new_path)

        entry = self._emulator.rename(location, old_rel, new_rel)
        logger.info("renamed %r -> %r", old_rel, entry.path)
        self.file_changed.emit(ChangeEvent("rename", {"path": old_rel}, entry))
        return entry

    def delete(self, path: str) -> None:
        location, rel = self._resolve(path)
        target = self._emulator.delete(location, rel)
        logger.info("deleted %s %r", target.kind.value.lower(), rel)
        self.file_changed.emit(ChangeEvent("delete", {"path": rel}, {"path": None}))

    def copy(self, path: str, dest_dir: str) -> ContentEntry:
        """Copy path into dest_dir (same bucket and root) as "<name>-Copy[N]"."""
        location, rel = self._resolve(path)
        entry = self._emulator.copy(location, rel, self._relative(location, dest_dir))
        logger.info("copied %r -> %r", rel, entry.path)
        self.file_changed.emit(ChangeEvent("new", None, entry))
        return entry

    def copy_to_another_bucket(self, path: str, dest_dir: str, bucket: str) -> ContentEntry:
        """
        Copy path into dest_dir of another bucket.

        dest_dir is relative to the top level of the destination bucket; this
        drive's root does not apply there.
        """
        if not bucket or not isinstance(bucket, str):
            raise InvalidArgumentError("destination bucket must be a non-empty string")
        location, rel = self._resolve(path)
        dest_location = DriveLocation(bucket=bucket)

        entry = self._emulator.copy(
            location, rel, normalize_path(dest_dir), dest_location=dest_location
        )
        logger.info("copied %r -> %s/%r", rel, bucket, entry.path)
        self.file_changed.emit(ChangeEvent("new", None, entry))
        return entry

    def get_download_url(self, path: str) -> str:
        """
        Return a time-limited signed URL that downloads the file.

        Raises:
            NotFoundError: if no object exists at path.
        """
        location, rel = self._resolve(path)
        key = location.key_for(rel)
        self._controller.head_object(location.bucket, key)
        return self._controller.presigned_url(
            location.bucket, key, expires_in=self._presign_expires_in
        )

    # ----------------------------
    # Checkpoints (the drive keeps no versions)
    # ----------------------------
    def create_checkpoint(self, path: str) -> CheckpointModel:
        self._require_active()
        return CheckpointModel()

    def list_checkpoints(self, path: str) -> list[CheckpointModel]:
        self._require_active()
        return []

    def restore_checkpoint(self, path: str, checkpoint_id: str) -> None:
        self._require_active()
        raise ReadOnlyError("Repository is read only")

    def delete_checkpoint(self, path: str, checkpoint_id: str) -> None:
        self._require_active()
        raise ReadOnlyError("Read only")

    # ----------------------------
    # Internals
    # ----------------------------
    def _require_active(self) -> None:
        if self._status is DriveStatus.DISPOSED:
            raise InvalidStateError("Drive is disposed")
        if self._status is not DriveStatus.ACTIVE:
            raise InvalidStateError("Drive is not activated. Call activate() first.")

    def _location(self) -> DriveLocation:
        with self._lock:
            self._require_active()
            return DriveLocation(bucket=self._identity.name, root=self._identity.root)

    @staticmethod
    def _relative(location: DriveLocation, path: Optional[str]) -> str:
        return normalize_path(strip_drive_name(path or "", location.bucket))

    def _resolve(self, path: Optional[str]) -> tuple[DriveLocation, str]:
        location = self._location()
        return location, self._relative(location, path)

    def __repr__(self) -> str:
        ident = self._identity
        return f"S3Drive(name={ident.name!r}, root={ident.root!r}, status={self._status.value})"

    def to_dict(self) -> dict[str, Any]:
        ident = self.identity
        return {
            "name": ident.name,
            "root": ident.root,
            "region": ident.region,
            "provider": ident.provider,
            "base_url": self.base_url,
            "creation_date": ident.creation_date,
        }
