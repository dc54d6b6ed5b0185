"""
KeyCheck Collectors Module
===========================

Network collectors that retrieve key material from remote endpoints.
"""

from keycheck.collectors.tls_collector import TLSCertificateFetcher

__all__ = ["TLSCertificateFetcher"]
