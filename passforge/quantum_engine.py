from __future__ import annotations

"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them in alternating bases, and returns raw bitstrings.

QuantumRandomSource wraps it as a RandomSource so the generator can
draw from simulated measurements instead of the OS CSPRNG.
"""
import math
from typing import List

from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator

from .mixing import bits_to_bytes, expand_to_words
from .random_source import WORD_BITS, RandomSource

DEFAULT_NUM_QUBITS = 20

# Never seed the SHA-256 stretch with fewer measured bits than this.
MIN_SEED_BITS = 256


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, num_qubits: int = DEFAULT_NUM_QUBITS) -> None:
        if num_qubits < 1:
            raise ValueError("num_qubits must be at least 1.")
        self.num_qubits = num_qubits
        # Local simulator backend.
        self.backend = AerSimulator()

        # Safety: ensure requested num_qubits does not exceed backend capability.
        max_qubits = getattr(self.backend.configuration(), "num_qubits", None)
        if max_qubits is not None and num_qubits > max_qubits:
            raise ValueError(
                f"num_qubits={num_qubits} exceeds backend limit ({max_qubits})."
            )

    def build_circuit(self) -> tuple[QuantumCircuit, list[str]]:
        """
        Prepare N qubits, put them in superposition, then measure
        in alternating bases (Z, X, Z, X, ...).
        """
        n = self.num_qubits
        measurement_basis: list[str] = []

        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        # Odd qubits get a second H so they are read in the X basis.
        for i in range(n):
            if i % 2 == 1:
                measurement_basis.append("X")
                qc.h(i)
            else:
                measurement_basis.append("Z")
            qc.measure(i, i)

        return qc, measurement_basis

    def get_raw_bits(self, shots: int = 1) -> List[int]:
        """
        Run the circuit ``shots`` times and return every measured bit,
        qubit 0 first within each shot.
        """
        qc, _basis = self.build_circuit()
        tqc = transpile(qc, self.backend)

        result = self.backend.run(tqc, shots=max(1, shots), memory=True).result()

        bits: List[int] = []
        for bitstring in result.get_memory():
            # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
            bits.extend(int(b) for b in bitstring[::-1])
        return bits


class QuantumRandomSource(RandomSource):
    """
    RandomSource backed by simulated qubit measurements.

    Each call runs enough shots to measure at least 32 bits per requested
    word (and never fewer than MIN_SEED_BITS), then stretches them with
    SHA-256 to exactly the requested number of words.

    The simulator is a seeded classical PRNG, so this source is not secure.
    """

    secure = False

    def __init__(self, num_qubits: int = DEFAULT_NUM_QUBITS, rounds: int = 2) -> None:
        self.engine = QuantumEngine(num_qubits)
        self.rounds = rounds

    def shots_for(self, n: int) -> int:
        wanted = max(MIN_SEED_BITS, n * WORD_BITS)
        return math.ceil(wanted / self.engine.num_qubits)

    def next_uniform(self, n: int) -> List[int]:
        if n < 1:
            return []
        bits = self.engine.get_raw_bits(self.shots_for(n))
        return expand_to_words(bits_to_bytes(bits), n, self.rounds)
