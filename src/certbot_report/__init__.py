"""
certbot_report — structured certificate records from `certbot certificates` output.

Parses the captured plain-text report of the certbot CLI into immutable
CertificateRecord values (name, domains, expiry in UTC, file paths).

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable error handling at the adapter boundaries.
"""

__version__ = "0.1.0"
