from docpipe.inference.client_base import BaseInferenceClient
from docpipe.inference.factory import InferenceClientFactory
from docpipe.inference.prompt_loader import load_prompt

__all__ = ["BaseInferenceClient", "InferenceClientFactory", "load_prompt"]
