"""Output — Rich terminal reporting."""
