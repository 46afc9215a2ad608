"""Workers AI client: text embeddings and text generation."""

from .cloudflare import CloudflareClient
from .exceptions import WorkersAIError
from .logging_config import get_logger

logger = get_logger("workers_ai")


class WorkersAIClient(CloudflareClient):
    """Runs embedding and generative models hosted on Workers AI."""

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for a single piece of text."""
        model = self.config.embedding_model
        result = await self._request("POST", f"/ai/run/{model}", json={"text": text})

        try:
            vector = result["data"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise WorkersAIError(f"Malformed embedding response from {model}") from e

        logger.debug(f"Embedded {len(text)} chars with {model} ({len(vector)} dims)")
        return vector

    async def generate(self, prompt: str, max_tokens: int) -> str:
        """Run the text model on a prompt and return the raw generated text."""
        model = self.config.text_model
        result = await self._request(
            "POST",
            f"/ai/run/{model}",
            json={"prompt": prompt, "max_tokens": max_tokens},
        )

        if not isinstance(result, dict) or not isinstance(result.get("response"), str):
            raise WorkersAIError(f"Malformed generation response from {model}")

        logger.info(f"Generated {len(result['response'])} chars with {model}")
        return result["response"]
