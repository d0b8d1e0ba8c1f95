"""
Core package for the monster animator.

This package exposes composable building blocks:
- API key server (Flask)
- API key resolution for the client
- Gemini / Veo client wrapper
- Image-to-video generation pipeline
- Image loading and video saving helpers
"""
