"""
Script model with provider fallback.
Priority: Groq → OpenRouter → Ollama (only the providers that are configured).
Groq and OpenRouter speak the OpenAI chat-completions protocol over requests.
"""

from typing import Dict, List, Optional

import ollama
import requests

from global_news_bot.domain.errors import ConfigurationMissing, GenerationDegraded
from global_news_bot.ports.interfaces import IScriptModel


class LLMScriptModel(IScriptModel):
    """Unified LLM client; raises GenerationDegraded when every configured provider fails."""

    def __init__(
        self,
        *,
        groq_api_key: str = "",
        groq_model: str = "llama-3.1-8b-instant",
        groq_base_url: str = "https://api.groq.com/openai/v1",
        openrouter_api_key: str = "",
        openrouter_model: str = "meta-llama/llama-3.1-8b-instruct:free",
        openrouter_base_url: str = "https://openrouter.ai/api/v1",
        use_ollama: bool = False,
        ollama_base_url: str = "http://localhost:11434",
        ollama_model: str = "llama3.1:8b",
        timeout: int = 30,
        max_tokens: int = 350,
        temperature: float = 0.8,
    ):
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

        self.groq_config = {"api_key": groq_api_key, "model": groq_model, "base_url": groq_base_url}
        self.openrouter_config = {
            "api_key": openrouter_api_key,
            "model": openrouter_model,
            "base_url": openrouter_base_url,
        }
        self.ollama_config = {"base_url": ollama_base_url, "model": ollama_model}

        self.providers: List[str] = []
        if groq_api_key.strip():
            self.providers.append("groq")
        if openrouter_api_key.strip():
            self.providers.append("openrouter")
        if use_ollama:
            self.providers.append("ollama")

    @property
    def configured(self) -> bool:
        return bool(self.providers)

    def complete(self, prompt: str) -> str:
        if not self.providers:
            raise ConfigurationMissing("No LLM provider configured")
        errors = []
        for provider in self.providers:
            try:
                if provider == "ollama":
                    text = self._generate_ollama(prompt)
                else:
                    config = self.groq_config if provider == "groq" else self.openrouter_config
                    text = self._generate_chat(config, prompt)
            except Exception as e:
                print(f"  ⚠️  {provider} error: {e}")
                errors.append(f"{provider}: {e}")
                continue
            if text and text.strip():
                print(f"  ✅ Script generated with {provider}")
                return text.strip()
            errors.append(f"{provider}: empty response")
        raise GenerationDegraded("All LLM providers failed" + (f" ({'; '.join(errors)})" if errors else ""))

    def _generate_chat(self, config: Dict[str, str], prompt: str) -> Optional[str]:
        url = f"{config['base_url']}/chat/completions"
        headers = {
            "Authorization": f"Bearer {config['api_key']}",
            "Content-Type": "application/json",
        }
        data = {
            "model": config["model"],
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        response = requests.post(url, headers=headers, json=data, timeout=self.timeout)
        response.raise_for_status()
        result = response.json()
        return (result.get("choices") or [{}])[0].get("message", {}).get("content", "")

    def _generate_ollama(self, prompt: str) -> Optional[str]:
        client = ollama.Client(host=self.ollama_config["base_url"], timeout=self.timeout)
        response = client.generate(
            model=self.ollama_config["model"],
            prompt=prompt,
            options={
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        )
        return response.get("response", "")
