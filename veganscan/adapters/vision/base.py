class VisionAdapter:
    ready = True

    def describe(self, image, prompt: str, max_tokens: int) -> str:
        """Send one image + instruction to the model and return its raw text.

        Raises errors.VisionError on any failure; transient=True marks a
        transport failure worth a single retry.
        """
        raise NotImplementedError
