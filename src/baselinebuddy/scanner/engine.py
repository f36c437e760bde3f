"""Scan engine — orchestrates detection and classification across files."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from baselinebuddy.errors import PathError, ReadError, ScanCancelledError
from baselinebuddy.registry.registry import FeatureRegistry, load_default_registry
from baselinebuddy.scanner.classifier import IssueClassifier
from baselinebuddy.scanner.detector import SignatureDetector
from baselinebuddy.scanner.models import Issue, ScanResult
from baselinebuddy.scanner.options import ScanOptions
from baselinebuddy.scanner.signatures import SIGNATURES, Signature

logger = logging.getLogger(__name__)

SCANNABLE_EXTENSIONS = frozenset(
    {".css", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".html", ".htm"}
)

# VCS metadata is never scanned, whatever the exclude patterns say
_SKIP_DIRS = {".git", ".hg", ".svn"}

# Max file size to scan (1 MB)
_MAX_FILE_SIZE = 1_048_576


def read_source(path: Path) -> str:
    """Read a source file as UTF-8 text, raising ReadError on failure."""
    try:
        if path.stat().st_size > _MAX_FILE_SIZE:
            raise ReadError(f"{path} is larger than {_MAX_FILE_SIZE} bytes")
        data = path.read_bytes()
    except OSError as e:
        raise ReadError(f"Cannot read {path}: {e}") from e

    if b"\x00" in data:
        raise ReadError(f"{path} looks like a binary file")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ReadError(f"{path} is not valid UTF-8: {e}") from e


class ScanEngine:
    """Runs detector and classifier over files and directory trees.

    The engine holds only read-only collaborators, so one instance can serve
    concurrent scans.
    """

    def __init__(
        self,
        registry: FeatureRegistry | None = None,
        signatures: Sequence[Signature] | None = None,
        fix_engine=None,
    ) -> None:
        self._defaults = registry is None and signatures is None
        self._registry = (
            registry if registry is not None else load_default_registry()
        )
        self._detector = SignatureDetector(
            tuple(signatures) if signatures is not None else SIGNATURES
        )
        self._classifier = IssueClassifier(self._registry)
        self._fix_engine = fix_engine
        self._lock = threading.Lock()

    @property
    def registry(self) -> FeatureRegistry:
        return self._registry

    @property
    def fix_engine(self):
        """Auto-fix engine, created on first use."""
        with self._lock:
            if self._fix_engine is None:
                from baselinebuddy.fixes.engine import AutoFixEngine

                if self._defaults:
                    self._fix_engine = AutoFixEngine()
                else:
                    self._fix_engine = AutoFixEngine(
                        registry=self._registry,
                        signatures=self._detector.signatures,
                    )
            return self._fix_engine

    def analyze_file(
        self, path: str, content: str, options: ScanOptions | None = None
    ) -> list[Issue]:
        """Issues in already-loaded content. Touches no filesystem."""
        options = options or ScanOptions()
        detections = self._detector.detect(content, str(path))
        issues = [
            issue
            for issue in self._classifier.classify(detections, str(path))
            if options.reports(issue.status)
        ]
        if options.enable_ai and issues:
            engine = self.fix_engine
            for issue in issues:
                issue.auto_fix = engine.generate_suggestion(issue).auto_fix
        return issues

    def scan_file(
        self, path: str | Path, options: ScanOptions | None = None
    ) -> ScanResult:
        """Scan one file. An unreadable file yields an empty, unscanned result."""
        options = options or ScanOptions()
        path = Path(path)
        if not path.exists():
            raise PathError(f"No such file: {path}")
        if not path.is_file():
            raise PathError(f"Not a file: {path}")

        start = time.time()
        issues = self._scan_one(path, options)
        duration = time.time() - start
        if issues is None:
            return ScanResult.build([], 0, 0, root=str(path), duration=duration)
        return ScanResult.build(
            issues,
            scanned=1,
            with_issues=1 if issues else 0,
            root=str(path),
            duration=duration,
        )

    def scan_directory(
        self,
        root: str | Path,
        options: ScanOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> ScanResult:
        """Scan every eligible file under root and aggregate the results."""
        options = options or ScanOptions()
        root = Path(root)
        if not root.exists():
            raise PathError(f"No such directory: {root}")
        if not root.is_dir():
            raise PathError(f"Not a directory: {root}")
        root = root.resolve()
        start = time.time()

        issues: list[Issue] = []
        scanned = 0
        with_issues = 0
        for file_issues in self._analyze_tree(root, options, cancel):
            if file_issues is None:
                continue
            scanned += 1
            if file_issues:
                with_issues += 1
                issues.extend(file_issues)

        # Summary is derived once from the complete list
        return ScanResult.build(
            issues,
            scanned=scanned,
            with_issues=with_issues,
            root=str(root),
            duration=time.time() - start,
        )

    def _analyze_tree(
        self,
        root: Path,
        options: ScanOptions,
        cancel: threading.Event | None,
    ) -> Iterator[list[Issue] | None]:
        """Per-file results in walk order; None marks an unreadable file."""
        if options.workers <= 1:
            for path in self._walk(root, options, cancel):
                yield self._scan_one(path, options)
            return

        paths = list(self._walk(root, options, cancel))
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            futures = [pool.submit(self._scan_one, p, options) for p in paths]
            for future in futures:
                if cancel is not None and cancel.is_set():
                    for pending in futures:
                        pending.cancel()
                    raise ScanCancelledError(f"Scan of {root} cancelled")
                yield future.result()

    def _scan_one(self, path: Path, options: ScanOptions) -> list[Issue] | None:
        try:
            content = read_source(path)
        except ReadError as e:
            logger.warning("Skipping %s: %s", path, e)
            return None
        logger.debug("Scanning %s", path)
        return self.analyze_file(str(path), content, options)

    def _walk(
        self,
        root: Path,
        options: ScanOptions,
        cancel: threading.Event | None,
    ) -> Iterator[Path]:
        """Depth-first walk yielding eligible files in a stable order."""
        count = 0
        for current, dirs, files in os.walk(root):
            rel_dir = Path(current).relative_to(root)
            depth = len(rel_dir.parts)

            # Prune skipped directories in-place
            dirs[:] = sorted(
                d
                for d in dirs
                if d not in _SKIP_DIRS
                and not options.is_dir_excluded((rel_dir / d).as_posix())
            )
            if options.max_depth and depth >= options.max_depth:
                dirs[:] = []

            for name in sorted(files):
                if cancel is not None and cancel.is_set():
                    raise ScanCancelledError(f"Scan of {root} cancelled")
                if Path(name).suffix.lower() not in SCANNABLE_EXTENSIONS:
                    continue
                relative = (rel_dir / name).as_posix()
                if not options.should_scan(relative):
                    continue
                if options.max_files and count >= options.max_files:
                    logger.warning(
                        "Stopping after %d files under %s (max_files)", count, root
                    )
                    return
                count += 1
                yield Path(current) / name


@functools.lru_cache(maxsize=1)
def default_engine() -> ScanEngine:
    return ScanEngine()


def analyze_file(
    path: str, content: str, options: ScanOptions | None = None
) -> list[Issue]:
    return default_engine().analyze_file(path, content, options)


def scan_file(path: str | Path, options: ScanOptions | None = None) -> ScanResult:
    return default_engine().scan_file(path, options)


def scan_directory(
    root: str | Path,
    options: ScanOptions | None = None,
    cancel: threading.Event | None = None,
) -> ScanResult:
    return default_engine().scan_directory(root, options, cancel)
