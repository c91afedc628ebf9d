# school_elections/security/audit_tags.py

from cryptography.hazmat.primitives import hashes, hmac

# Keyed tags for ballots and ledger rows. A bare hash of dni|race|timestamp
# can be brute-forced from public data, so the key never leaves the server.

TAG_LENGTH = 32


class AuditTagger:
    def __init__(self, secret_key):
        if not secret_key:
            raise ValueError("Audit secret key must not be empty")
        if isinstance(secret_key, str):
            secret_key = secret_key.encode()
        self._key = secret_key

    def tag(self, *parts) -> str:
        """HMAC-SHA256 over the '|'-joined parts, truncated to 32 hex chars."""
        payload = '|'.join(str(p) for p in parts).encode()
        h = hmac.HMAC(self._key, hashes.SHA256())
        h.update(payload)
        return h.finalize().hex()[:TAG_LENGTH]

    def ballot_tag(self, dni, race, timestamp) -> str:
        return self.tag(dni, race, timestamp.isoformat())

    def ledger_tag(self, ballot_id, mesa_id) -> str:
        return self.tag(ballot_id, mesa_id)

    def voter_ref(self, dni) -> str:
        """Pseudonymous voter reference for the security event log."""
        return self.tag('voter', dni)
