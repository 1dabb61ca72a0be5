"""
Persistence Module

Streams the surviving individuals of each generation to an external
collector. Every record travels over its own short-lived TCP connection as a
single JSON line, the format a Logstash ``tcp`` input with a ``json_lines``
codec indexes into Elasticsearch.

Features:
- IndividualRecord wire format
- TCP JSON-lines sink with per-record connections
- Log-and-continue failure policy (no retries)
- Null sink for runs without a collector
"""

import json
import socket
from dataclasses import dataclass, asdict
from typing import Iterable, List
from ga_constants import SinkConstants
from ga_exceptions import handle_persistence_error


@dataclass
class IndividualRecord:
    """One individual as written to the sink."""

    entities: List[int]
    amount: int
    fitness: int
    generation: int

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(',', ':'))


class RecordSink:
    """
    Interface for individual persistence.

    ``send`` must never raise for delivery problems; it reports success as a
    boolean so the evolution loop can carry on regardless.
    """

    def __init__(self):
        self.stats = {
            'records_sent': 0,
            'send_failures': 0
        }

    def send(self, record: IndividualRecord) -> bool:
        raise NotImplementedError

    def persist_population(self, individuals: Iterable) -> int:
        """
        Send one record per individual.

        Args:
            individuals: Individuals currently in the population

        Returns:
            Number of records delivered
        """
        delivered = 0
        for individual in individuals:
            if self.send(individual.to_record()):
                delivered += 1
        return delivered

    def get_statistics(self) -> dict:
        return self.stats.copy()

    def describe(self) -> str:
        return type(self).__name__


class NullSink(RecordSink):
    """Sink that accepts and discards every record."""

    def send(self, record: IndividualRecord) -> bool:
        self.stats['records_sent'] += 1
        return True

    def describe(self) -> str:
        return "disabled"


class TcpJsonSink(RecordSink):
    """
    Writes each record as a JSON line over a fresh TCP connection.

    Connection or write failures are logged through handle_persistence_error
    and counted; they never propagate to the caller.
    """

    def __init__(self, host: str = SinkConstants.DEFAULT_HOST,
                 port: int = SinkConstants.DEFAULT_PORT,
                 index: str = SinkConstants.DEFAULT_INDEX,
                 timeout: float = SinkConstants.CONNECT_TIMEOUT_SECONDS):
        """
        Initialize the TCP sink.

        Args:
            host: Collector hostname or IP
            port: Collector TCP port
            index: Index name the collector stores records under (informational,
                routing is configured on the collector side)
            timeout: Connect and write timeout in seconds
        """
        super().__init__()
        self.host = host
        self.port = port
        self.index = index
        self.timeout = timeout

    def send(self, record: IndividualRecord) -> bool:
        """
        Deliver one record.

        Returns:
            True if the record was written, False if the write failed
        """
        payload = (record.to_json() + SinkConstants.RECORD_TERMINATOR).encode(SinkConstants.RECORD_ENCODING)

        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as conn:
                conn.sendall(payload)
        except OSError as e:
            self.stats['send_failures'] += 1
            return handle_persistence_error(e, self.host, self.port, generation=record.generation)

        self.stats['records_sent'] += 1
        return True

    def describe(self) -> str:
        return f"tcp://{self.host}:{self.port} (index: {self.index})"


def create_sink(config) -> RecordSink:
    """Build the sink described by a GAConfig."""
    if not config.enable_sink:
        return NullSink()
    return TcpJsonSink(config.sink_host, config.sink_port, config.sink_index)
