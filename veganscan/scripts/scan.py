"""
Command-line scanner: upload a photo or capture one from the webcam,
send it to the relay and print the verdict.

Usage:
    python veganscan/scripts/scan.py --file label.jpg
    python veganscan/scripts/scan.py --camera [--front]
    RELAY_URL=http://host:8000 python veganscan/scripts/scan.py --file label.webp
"""
import argparse
import os
import sys
from dotenv import load_dotenv
from veganscan.adapters.codec.raster_codec import RasterCodec
from veganscan.adapters.relay.http_relay import HttpRelay
from veganscan.orchestrator.ingest import file_from_path
from veganscan.orchestrator.scanner import Scanner
from veganscan.orchestrator.state_machine import CameraSession
from veganscan.services.status_store import StatusStore


def build_scanner(status: StatusStore, facing: str = "environment") -> Scanner:
    from veganscan.adapters.camera.cv2_camera import CV2Camera
    codec = RasterCodec()
    session = CameraSession(CV2Camera(status), codec, status, facing=facing)
    relay = HttpRelay(status, base_url=os.getenv("RELAY_URL", "http://127.0.0.1:8000"))
    return Scanner(session, codec, relay, status)


def main(argv=None) -> int:
    load_dotenv(dotenv_path=".env", override=False)
    parser = argparse.ArgumentParser(description="Ask the relay whether a product is vegan.")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", help="image to upload (png, jpeg, gif, webp)")
    src.add_argument("--camera", action="store_true", help="capture one frame from the webcam")
    parser.add_argument("--front", action="store_true", help="prefer the user-facing camera")
    parser.add_argument("-v", "--verbose", action="store_true", help="print the log buffer")
    args = parser.parse_args(argv)

    status = StatusStore()
    facing = "user" if args.front else "environment"
    with build_scanner(status, facing) as scanner:
        if args.file:
            ok = scanner.upload(file_from_path(args.file))
        else:
            ok = scanner.open_camera() and scanner.capture()

        if ok:
            scanner.analyze()

        if args.verbose:
            for line in status.logs:
                print(f"[log] {line}", file=sys.stderr)

        error = scanner.error or scanner.camera_error
        if error:
            print(error, file=sys.stderr)
            return 1
        print(scanner.result)
        return 0


if __name__ == "__main__":
    sys.exit(main())
