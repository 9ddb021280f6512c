import secrets
import time


class UniqueIdGenerator:
    @staticmethod
    def current_millis() -> int:
        return int(time.time() * 1000)

    @staticmethod
    def generate_payment_reference(prefix: str) -> str:
        """
        Generate an external payment reference with format: {prefix}{unix ms}{random 0000-9999}

        Uniqueness is probabilistic, collisions are not checked.
        """
        return f"{prefix}{UniqueIdGenerator.current_millis()}{secrets.randbelow(10000):04d}"

    @staticmethod
    def generate_probe_reference() -> str:
        """
        Generate the reference used by connectivity probes: TEST{unix ms}
        """
        return f"TEST{UniqueIdGenerator.current_millis()}"
