from veganscan.adapters.vision.base import VisionAdapter

MOCK_REPLY = "Não. (mock) Nenhum modelo configurado; defina OPENAI_API_KEY ou ANTHROPIC_API_KEY."

class MockVision(VisionAdapter):
    def __init__(self, status_store, reply: str = MOCK_REPLY):
        self.status = status_store
        self.reply = reply
        self.calls = []

    def describe(self, image, prompt: str, max_tokens: int) -> str:
        self.calls.append((image, prompt, max_tokens))
        self.status.log(f"mock_vision: {image.mime_type} {len(image.data)}B")
        return self.reply
