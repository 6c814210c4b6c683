from veganscan.orchestrator.contracts import EncodedImage, UploadedFile
from veganscan.orchestrator.ingest import ingest_file
from veganscan.orchestrator import errors


class Scanner:
    """
    Client-side UI state: one image, one result, one inline error.

    Only one capture/upload/analyze runs at a time; analyze() is ignored
    while a request is in flight.
    """

    def __init__(self, session, codec, relay, status_store):
        self.session = session
        self.codec = codec
        self.relay = relay
        self.status = status_store
        self.image: EncodedImage | None = None
        self.result: str | None = None
        self.error: str | None = None
        self.loading = False

    @property
    def camera_error(self) -> str | None:
        return self.session.error

    @property
    def show_camera(self) -> bool:
        return self.session.active

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and not self.loading

    def open_camera(self) -> bool:
        self.error = None
        return self.session.open()

    def close_camera(self):
        self.session.close()

    def toggle_camera(self) -> bool:
        if self.session.active:
            self.close_camera()
        else:
            self.open_camera()
        return self.session.active

    def capture(self) -> bool:
        try:
            image = self.session.capture()
        except errors.MediaError as e:
            self.status.log(f"scanner: capture failed {e.code}")
            self.error = e.message
            return False
        self.image = image
        self.result = None
        self.error = None
        return True

    def upload(self, file: UploadedFile) -> bool:
        try:
            image = ingest_file(file, self.codec)
        except errors.MediaError as e:
            self.status.log(f"scanner: upload rejected {file.name} ({e.code})")
            self.error = e.message
            return False
        self.image = image
        self.result = None
        self.error = None
        return True

    def analyze(self) -> str | None:
        if not self.can_analyze:
            return None

        self.loading = True
        self.error = None
        try:
            self.result = self.relay.analyze(self.image)
            return self.result
        except errors.VeganScanError as e:
            self.error = e.message
            return None
        finally:
            self.loading = False

    def close(self):
        try:
            self.session.close()
        finally:
            if hasattr(self.relay, "close"):
                self.relay.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
