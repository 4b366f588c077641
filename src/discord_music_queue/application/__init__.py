"""Application Layer

Use cases that coordinate the domain with the audio engine, resolver and notifier ports.
"""
