"""Signature detector — line-by-line containment matching over file content."""

from __future__ import annotations

from pathlib import PurePath

from baselinebuddy.scanner.models import Detection
from baselinebuddy.scanner.signatures import SIGNATURES, Signature, signatures_for


class SignatureDetector:
    """Finds signature hits in source text.

    Output is ordered by line, then by signature registration order. Column
    is always 1: hits are not positioned within the line.
    """

    def __init__(self, signatures: tuple[Signature, ...] = SIGNATURES) -> None:
        self._signatures = tuple(signatures)

    @property
    def signatures(self) -> tuple[Signature, ...]:
        return self._signatures

    def detect(self, content: str, file_path: str) -> list[Detection]:
        file_type = PurePath(file_path).suffix.lower().lstrip(".")
        applicable = signatures_for(file_type, self._signatures)
        if not applicable:
            return []

        detections: list[Detection] = []
        for line_num, line in enumerate(content.split("\n"), start=1):
            line = line.removesuffix("\r")
            for signature in applicable:
                if signature.matches(line):
                    detections.append(
                        Detection(
                            feature_id=signature.feature_id,
                            line=line_num,
                            column=1,
                            css_property=signature.css_property,
                            value=signature.value,
                            signature=signature,
                        )
                    )
        return detections
