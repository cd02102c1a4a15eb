"""HierarchyEmulator: directory semantics on top of a flat key space."""

from __future__ import annotations

import logging
from typing import Optional

from s3drive.controller import S3Controller
from s3drive.controller.params import SAVE_CACHE_CONTROL
from s3drive.errors import NotFoundError
from s3drive.filetypes import ExtensionRegistry, FileTypeInfo, classify, classify_name
from s3drive.models import (
    DIRECTORY_TYPE,
    ContentEntry,
    CreateOptions,
    ObjectInfo,
    SaveOptions,
    Target,
    TargetKind,
)
from s3drive.paths import SEP, DriveLocation, basename, dirname, join, normalize_path, split_ext
from s3drive.util.time import now_utc

from .body import decode_body, empty_notebook_body, encode_body
from .fanout import DEFAULT_MAX_WORKERS, run_fanout
from .naming import collision_free_name, copy_name, untitled_name
from .validators import validate_distinct, validate_not_into_self, validate_not_root

logger = logging.getLogger(__name__)


class HierarchyEmulator:
    """
    Directory semantics over object-store primitives.

    Rules:
        - A directory exists if a marker "<key>/" exists or any key starts
          with "<key>/".
        - A name without an extension is listed as a directory.
        - Every call receives a DriveLocation snapshot; keys are never derived
          from mutable drive state.
        - Multi-key operations fan out with bounded concurrency and are not
          atomic: a failure leaves already-completed keys in place.
    """

    def __init__(
        self,
        controller: S3Controller,
        registry: ExtensionRegistry,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._controller = controller
        self._registry = registry
        self._max_workers = max_workers

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    # ----------------------------
    # Read
    # ----------------------------
    def list_directory(
        self,
        location: DriveLocation,
        path: str,
        *,
        name: Optional[str] = None,
    ) -> ContentEntry:
        """
        Return a directory entry whose content lists its immediate children.

        Raises:
            NotFoundError: if path is not the root and nothing exists under it.
        """
        rel = normalize_path(path)
        prefix = location.dir_prefix(rel)
        objects = self._controller.list_all(location.bucket, prefix)
        if rel and not objects:
            raise NotFoundError(
                "Directory not found",
                details={"bucket": location.bucket, "path": rel},
            )

        info = self._directory_info()
        return ContentEntry(
            name=basename(rel) or name or location.bucket,
            path=rel,
            type=DIRECTORY_TYPE,
            format=info.format,
            mimetype=info.mimetype,
            content=self._children(rel, prefix, objects),
        )

    def read_file(
        self,
        location: DriveLocation,
        path: str,
        *,
        content: bool = True,
    ) -> ContentEntry:
        """Return a file entry, with its decoded body when content=True."""
        rel = normalize_path(path)
        key = location.key_for(rel)
        name = basename(rel)
        info = classify_name(name, self._registry)

        if not content:
            head = self._controller.head_object(location.bucket, key)
            return self._file_entry(rel, info, head)

        stored = self._controller.get_object(location.bucket, key)
        body, fmt = decode_body(stored.body, info)
        entry = self._file_entry(rel, info, stored.info)
        entry.content = body
        entry.format = fmt
        return entry

    def resolve_target(self, bucket: str, key: str) -> Target:
        """
        Decide once whether key names a directory or a file.

        A directory wins when both "<key>/" keys and an object "<key>" exist.
        """
        key = normalize_path(key)
        if self._controller.has_prefix(bucket, key + SEP):
            return Target(TargetKind.DIRECTORY, key)
        if self._controller.exists(bucket, key):
            return Target(TargetKind.FILE, key)
        raise NotFoundError("Path not found", details={"bucket": bucket, "key": key})

    # ----------------------------
    # Create / write
    # ----------------------------
    def create(
        self,
        location: DriveLocation,
        dir_path: str,
        name: str,
        body: bytes = b"",
        *,
        is_directory: bool = False,
    ) -> ContentEntry:
        """
        Write a new file, or a directory marker "<key>/" when is_directory.

        Files are written as-is; body serialization is save()'s job.
        """
        rel = join(dir_path, name)
        validate_not_root(rel, "create")
        key = location.key_for(rel)

        if not is_directory:
            info = classify_name(name, self._registry)
            self._controller.put_object(location.bucket, key, body, content_type=info.mimetype)
            return self._written_entry(location, rel, info)

        self._controller.put_object(location.bucket, key + SEP, b"")
        now = now_utc()
        info = self._directory_info()
        return ContentEntry(
            name=basename(rel),
            path=rel,
            type=DIRECTORY_TYPE,
            format=info.format,
            mimetype=info.mimetype,
            content=[],
            last_modified=now,
            created=now,
        )

    def new_untitled(self, location: DriveLocation, options: CreateOptions) -> ContentEntry:
        """Create an untitled file, notebook or folder in options.path."""
        options.validate()
        dir_rel = normalize_path(options.path)
        listing = self.list_directory(location, dir_rel)
        siblings = [child.name for child in listing.children]

        name = untitled_name(options.type, siblings, ext=options.ext)
        if options.type == "directory":
            return self.create(location, dir_rel, name, is_directory=True)

        body = empty_notebook_body() if options.type == "notebook" else b""
        return self.create(location, dir_rel, name, body)

    def save(self, location: DriveLocation, path: str, options: SaveOptions) -> ContentEntry:
        """Write content at path, replacing any existing object."""
        options.validate()
        rel = normalize_path(path)
        validate_not_root(rel, "save")

        if options.type == "directory":
            return self.create(location, dirname(rel), basename(rel), is_directory=True)

        info = classify_name(basename(rel), self._registry)
        body = encode_body(options.content, options.format, info)
        self._controller.put_object(
            location.bucket,
            location.key_for(rel),
            body,
            cache_control=SAVE_CACHE_CONTROL,
            content_type=info.mimetype,
        )
        return self._written_entry(location, rel, info)

    # ----------------------------
    # Rename / copy / delete
    # ----------------------------
    def rename(self, location: DriveLocation, old_path: str, new_path: str) -> ContentEntry:
        """
        Move a file or a whole directory subtree.

        Every key is copied then deleted; a taken destination name gets a
        numeric suffix instead of being overwritten.
        """
        old_rel = normalize_path(old_path)
        new_rel = normalize_path(new_path)
        validate_not_root(old_rel, "rename")
        validate_not_root(new_rel, "rename onto")
        validate_distinct(old_rel, new_rel)

        bucket = location.bucket
        target = self.resolve_target(bucket, location.key_for(old_rel))

        if self._name_taken(bucket, location.key_for(new_rel)):
            parent = dirname(new_rel)
            siblings = self._child_names(bucket, location.dir_prefix(parent))
            new_rel = join(parent, collision_free_name(basename(new_rel), target.is_directory, siblings))

        new_key = location.key_for(new_rel)
        if target.is_directory:
            validate_not_into_self(target.key, new_key, "move")

        def _move(source_key: str) -> None:
            dest_key = new_key + source_key[len(target.key):]
            self._controller.copy_object(bucket, source_key, dest_key)
            self._controller.delete_object(bucket, source_key)

        logger.debug("rename %r -> %r (%s)", target.key, new_key, target.kind.value)
        run_fanout(self._target_keys(bucket, target), _move, max_workers=self._max_workers)
        return self._destination_entry(location, new_rel, target.kind)

    def copy(
        self,
        location: DriveLocation,
        path: str,
        dest_dir: str,
        *,
        dest_location: Optional[DriveLocation] = None,
    ) -> ContentEntry:
        """
        Copy a file or directory subtree into dest_dir as "<name>-Copy[N]".

        dest_location selects another bucket/root; it defaults to location.
        """
        rel = normalize_path(path)
        validate_not_root(rel, "copy")

        target = self.resolve_target(location.bucket, location.key_for(rel))
        dest = dest_location or location
        dest_dir_rel = normalize_path(dest_dir)

        siblings = self._child_names(dest.bucket, dest.dir_prefix(dest_dir_rel))
        new_rel = join(dest_dir_rel, copy_name(basename(rel), target.is_directory, siblings))
        new_key = dest.key_for(new_rel)
        if target.is_directory and dest.bucket == location.bucket:
            validate_not_into_self(target.key, new_key, "copy")

        def _copy(source_key: str) -> None:
            dest_key = new_key + source_key[len(target.key):]
            self._controller.copy_object(
                location.bucket, source_key, dest_key, dest_bucket=dest.bucket
            )

        run_fanout(self._target_keys(location.bucket, target), _copy, max_workers=self._max_workers)
        return self._destination_entry(dest, new_rel, target.kind)

    def delete(self, location: DriveLocation, path: str) -> Target:
        """
        Delete a file, or a directory marker plus every key under it.

        The full key listing is taken before the first delete is issued.
        """
        rel = normalize_path(path)
        validate_not_root(rel, "delete")

        bucket = location.bucket
        target = self.resolve_target(bucket, location.key_for(rel))
        if not target.is_directory:
            self._controller.delete_object(bucket, target.key)
            return target

        keys = [obj.key for obj in self._controller.list_all(bucket, target.prefix)]
        logger.debug("delete directory %r: %d keys", target.key, len(keys))
        self._controller.delete_object(bucket, target.marker_key)
        remaining = [k for k in keys if k != target.marker_key]
        run_fanout(
            remaining,
            lambda key: self._controller.delete_object(bucket, key),
            max_workers=self._max_workers,
        )
        return target

    # ----------------------------
    # Internals
    # ----------------------------
    def _directory_info(self) -> FileTypeInfo:
        return classify("", self._registry)

    def _children(self, dir_rel: str, prefix: str, objects: list[ObjectInfo]) -> list[ContentEntry]:
        """Collapse a recursive listing into one entry per immediate child."""
        children: dict[str, ContentEntry] = {}
        for obj in objects:
            remainder = obj.key[len(prefix):]
            name, sep, _ = remainder.partition(SEP)
            if not name:
                if remainder:
                    logger.warning("skipping key with an empty path segment: %r", obj.key)
                continue
            if name in children:
                continue
            children[name] = self._child_entry(join(dir_rel, name), name, obj, nested=bool(sep))
        return list(children.values())

    def _child_entry(self, rel: str, name: str, obj: ObjectInfo, *, nested: bool) -> ContentEntry:
        if nested or not split_ext(name)[1]:
            dir_info = self._directory_info()
            return ContentEntry(
                name=name,
                path=rel,
                type=DIRECTORY_TYPE,
                format=dir_info.format,
                mimetype=dir_info.mimetype,
                last_modified=obj.last_modified,
            )
        return self._file_entry(rel, classify_name(name, self._registry), obj)

    def _file_entry(self, rel: str, info: FileTypeInfo, obj: ObjectInfo) -> ContentEntry:
        return ContentEntry(
            name=basename(rel),
            path=rel,
            type=info.type,
            format=info.format,
            mimetype=info.mimetype,
            size=obj.size,
            last_modified=obj.last_modified,
        )

    def _written_entry(self, location: DriveLocation, rel: str, info: FileTypeInfo) -> ContentEntry:
        head = self._controller.head_object(location.bucket, location.key_for(rel))
        entry = self._file_entry(rel, info, head)
        entry.created = now_utc()
        return entry

    def _destination_entry(self, location: DriveLocation, rel: str, kind: TargetKind) -> ContentEntry:
        if kind is TargetKind.FILE:
            return self.read_file(location, rel, content=True)

        page = self._controller.list_objects(
            location.bucket, location.dir_prefix(rel), max_keys=1
        )
        info = self._directory_info()
        return ContentEntry(
            name=basename(rel),
            path=rel,
            type=DIRECTORY_TYPE,
            format=info.format,
            mimetype=info.mimetype,
            last_modified=page.items[0].last_modified if page.items else None,
        )

    def _target_keys(self, bucket: str, target: Target) -> list[str]:
        if not target.is_directory:
            return [target.key]
        return [obj.key for obj in self._controller.list_all(bucket, target.prefix)]

    def _child_names(self, bucket: str, prefix: str) -> list[str]:
        names: set[str] = set()
        for obj in self._controller.list_all(bucket, prefix):
            name = obj.key[len(prefix):].partition(SEP)[0]
            if name:
                names.add(name)
        return sorted(names)

    def _name_taken(self, bucket: str, key: str) -> bool:
        return self._controller.exists(bucket, key) or self._controller.has_prefix(bucket, key + SEP)
