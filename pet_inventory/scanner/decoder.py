"""扫码：从摄像头画面中识别二维码/条形码，识别到后回调一次并释放摄像头。"""
import logging
from typing import Any, Callable, List, Optional

import cv2

from pet_inventory.config import CAMERA_INDEX
from pet_inventory.errors import ScannerUnavailableError
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import Pet

logger = logging.getLogger(__name__)

FrameDecoder = Callable[[Any], Optional[str]]


def decode_qr(frame) -> Optional[str]:
    text, _points, _ = cv2.QRCodeDetector().detectAndDecode(frame)
    return text or None


def decode_barcode(frame) -> Optional[str]:
    """一维码（EAN/UPC 等），需 OpenCV 4.8+ 的 cv2.barcode。"""
    detector_cls = getattr(getattr(cv2, "barcode", None), "BarcodeDetector", None)
    if detector_cls is None:
        return None
    ok, infos, _types, _points = detector_cls().detectAndDecodeWithType(frame)
    if not ok:
        return None
    return next((info for info in infos if info), None)


DEFAULT_DECODERS: List[FrameDecoder] = [decode_qr, decode_barcode]


class ScanDecoder:
    """摄像头扫码器：界面定时调用 poll()，识别成功后触发 on_decode 与 on_close。"""

    def __init__(
        self,
        on_decode: Callable[[str], None],
        on_close: Optional[Callable[[], None]] = None,
        camera_index: int = CAMERA_INDEX,
        capture_factory: Callable[[int], Any] = cv2.VideoCapture,
        decoders: Optional[List[FrameDecoder]] = None,
    ):
        self._on_decode = on_decode
        self._on_close = on_close
        self.camera_index = camera_index
        self._capture_factory = capture_factory
        self._decoders = decoders if decoders is not None else DEFAULT_DECODERS
        self._cap = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        if self._cap is not None:
            return
        cap = self._capture_factory(self.camera_index)
        if cap is None or not cap.isOpened():
            if cap is not None:
                cap.release()
            raise ScannerUnavailableError()
        self._cap = cap
        self._closed = False
        logger.info("摄像头 %s 已打开", self.camera_index)

    def decode_frame(self, frame) -> Optional[str]:
        for decoder in self._decoders:
            try:
                text = decoder(frame)
            except cv2.error as e:
                # 单帧识别失败很常见，换下一帧即可
                logger.debug("识别失败: %s", e)
                continue
            if text and text.strip():
                return text.strip()
        return None

    def poll(self) -> Optional[str]:
        """读取一帧并尝试识别；识别到则回调并关闭，返回识别结果。"""
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        code = self.decode_frame(frame)
        if code is None:
            return None
        logger.info("扫码结果: %s", code)
        self.close()
        self._on_decode(code)
        return code

    def close(self) -> None:
        """释放摄像头并通知 on_close，可重复调用。"""
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if not self._closed:
            self._closed = True
            if self._on_close is not None:
                self._on_close()


def resolve_scan(inventory: InventoryManager, code: str) -> Optional[Pet]:
    """把扫到的文字解析为宠物记录（条码或编号完全一致）。"""
    return inventory.lookup_by_code((code or "").strip())
