"""扫码识别（外部摄像头）。"""
from pet_inventory.scanner.decoder import ScanDecoder, resolve_scan

__all__ = ["ScanDecoder", "resolve_scan"]
