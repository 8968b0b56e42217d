"""Shared models, prompt templates, error messages and the Gemini client."""
