import cv2

ESC_KEY = 27
NO_KEY = -1


class OpenCVWindow:
    def __init__(self, name: str):
        self.name = name
        self._shown = False

    def show(self, image) -> None:
        cv2.imshow(self.name, image)
        self._shown = True

    def poll_key(self, timeout_ms: int) -> int:
        key = cv2.waitKey(timeout_ms)
        if key < 0:
            return NO_KEY
        return key & 0xFF

    def close(self) -> None:
        if self._shown:
            cv2.destroyWindow(self.name)
            self._shown = False


class NullDisplay:
    """Headless runs: nothing is shown and no key is ever pressed."""

    def show(self, image) -> None:
        return None

    def poll_key(self, timeout_ms: int) -> int:
        return NO_KEY

    def close(self) -> None:
        return None
