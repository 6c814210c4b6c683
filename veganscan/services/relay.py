"""
Analysis relay: validate a data-URI image, forward it to the vision model
with the fixed vegan-check prompt, return the model's text untouched.

Stateless; one Relay instance serves every request.
"""
from veganscan.orchestrator.contracts import EncodedImage
from veganscan.orchestrator.formats import parse_data_uri, decode_payload, is_supported
from veganscan.orchestrator import errors

MAX_TOKENS = 300
MAX_RETRIES = 1

PROMPT = (
    "Analyze this product image and tell me if it's vegan. "
    "Consider ingredients, certifications, and any visible labels. "
    "Respond with a clear 'Yes' or 'No' followed by a brief explanation. "
    "If you are not able to read the image content please be clear about it "
    "and the only thing you should say is to take the photo again. "
    "The answer should always be in Brazilian Portuguese."
)


class Relay:
    def __init__(self, vision, status_store, max_tokens: int = MAX_TOKENS, retries: int = MAX_RETRIES):
        self.vision = vision
        self.status = status_store
        self.max_tokens = max_tokens
        self.retries = max(0, min(retries, MAX_RETRIES))

    def validate(self, image_uri) -> EncodedImage:
        if not image_uri or not isinstance(image_uri, str):
            raise errors.MissingInput()

        mime_type, payload = parse_data_uri(image_uri)
        if not is_supported(mime_type):
            raise errors.UnsupportedFormat()
        data = decode_payload(payload)
        if data is None:
            raise errors.UnsupportedFormat()
        if not data:
            raise errors.MissingInput()
        return EncodedImage(data=data, mime_type=mime_type)

    def analyze(self, image_uri) -> str:
        image = self.validate(image_uri)
        self.status.log(f"relay: analyze {image.mime_type} {len(image.data)}B via {type(self.vision).__name__}")

        attempt = 0
        while True:
            try:
                text = self.vision.describe(image, PROMPT, self.max_tokens)
                self.status.log(f"relay: done ({len(text)} chars)")
                return text
            except errors.VisionError as e:
                self.status.log(f"relay: vision error (attempt {attempt + 1}): {e}")
                if e.transient and attempt < self.retries:
                    attempt += 1
                    continue
                self.status.last_error = str(e)
                raise errors.AnalysisFailed() from e
            except Exception as e:
                self.status.log(f"relay: {type(e).__name__}: {e}")
                self.status.last_error = f"{type(e).__name__}: {e}"
                raise errors.AnalysisFailed() from e
