"""
KeyLength KeyCheck -- Key Length Classifier
============================================

Classifies cryptographic key material read from files or live TLS
endpoints, measures its strength in bits and judges it against a
configurable, year-aware security standard (NIST, BSI, ANSSI, ECRYPT).

Modules:
    - keycheck.core.engine: Facade used by the CLI
    - keycheck.core.evaluator: Key + standard -> verdict
    - keycheck.core.orchestrator: Multi-port TLS scan loop
    - keycheck.core.standards: Standards catalog and thresholds
    - keycheck.analyzers: RSA, ECC and symmetric key material
    - keycheck.parsers: Key and scan-target parsing
    - keycheck.collectors: TLS certificate retrieval
    - keycheck.output: Console and JSON report output
    - keycheck.cli: Click-based command-line interface

References:
    - NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key Management.
    - NIST SP 800-131A Rev. 2 (2019). Cryptographic Algorithm Transitions.
    - BSI TR-02102-1 (2024). Cryptographic Mechanisms.
"""

__version__ = "1.0.0"
__tool_name__ = "keycheck"
