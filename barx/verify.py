"""Scan-verify: decode a composite image and check the payloads read back left to right."""

import time
from dataclasses import dataclass, field

import cv2
import numpy as np
from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode

from barx.logging import audit, get_logger, trace

log = get_logger("verify")


@dataclass
class ScanResult:
    """Result of a single decoder pass over an image."""
    success: bool
    decoded: list[str] = field(default_factory=list)
    decode_time_ms: float = 0.0
    decoder: str = ""
    error: str | None = None


def _finish(decoder: str, start: float, decoded: list[str]) -> ScanResult:
    elapsed = (time.perf_counter() - start) * 1000
    if decoded:
        audit("scan.verified", logger=log, decoder=decoder, success=True,
              time_ms=round(elapsed, 1), count=len(decoded))
        return ScanResult(success=True, decoded=decoded, decode_time_ms=elapsed, decoder=decoder)
    audit("scan.verified", logger=log, decoder=decoder, success=False,
          time_ms=round(elapsed, 1), error="No barcode detected")
    return ScanResult(success=False, decode_time_ms=elapsed, decoder=decoder,
                      error="No barcode detected")


def _failed(decoder: str, start: float, error: Exception) -> ScanResult:
    elapsed = (time.perf_counter() - start) * 1000
    audit("scan.error", logger=log, decoder=decoder, error=str(error), time_ms=round(elapsed, 1))
    return ScanResult(success=False, decode_time_ms=elapsed, decoder=decoder, error=str(error))


@trace
def scan_pyzbar(image: Image.Image) -> ScanResult:
    """Decode every barcode with pyzbar (wraps ZBar)."""
    start = time.perf_counter()
    try:
        symbols = sorted(pyzbar_decode(image.convert("L")), key=lambda s: s.rect.left)
    except Exception as e:
        return _failed("pyzbar/zbar", start, e)
    decoded = [s.data.decode("utf-8", errors="replace") for s in symbols]
    return _finish("pyzbar/zbar", start, decoded)


@trace
def scan_opencv(image: Image.Image) -> ScanResult:
    """Decode every barcode with OpenCV's 1D barcode detector."""
    start = time.perf_counter()
    try:
        gray = cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2GRAY)
        detector = cv2.barcode.BarcodeDetector()
        ok, infos, _types, points = detector.detectAndDecodeWithType(gray)
    except Exception as e:
        return _failed("opencv", start, e)

    decoded = []
    if ok and points is not None:
        found = [(float(np.min(p[:, 0])), info) for info, p in zip(infos, points) if info]
        decoded = [info for _, info in sorted(found, key=lambda item: item[0])]
    return _finish("opencv", start, decoded)


SCANNERS = (scan_pyzbar, scan_opencv)


@trace
def verify(image: Image.Image, expected: list[str] | None = None) -> list[ScanResult]:
    """Run every decoder on a composite.

    Args:
        image: Composite image (any Pillow mode).
        expected: Payloads in left-to-right order. A decoder that reads a
                  different list is marked failed.

    Returns:
        One ScanResult per decoder.
    """
    results = []
    for scanner in SCANNERS:
        result = scanner(image)
        if result.success and expected is not None and result.decoded != list(expected):
            result.success = False
            result.error = f"Data mismatch: got {result.decoded}, expected {list(expected)}"
        results.append(result)
    return results
