import logging
import time

logger = logging.getLogger(__name__)


class OpCounter:
    def __init__(self):
        self.visits = 0
        self.link_writes = 0
        self.rotations = 0
        self.rebalances = 0
        self.start_time = None
        self.total_time_ms = 0.0

    def count_visit(self, n=1):
        self.visits += n

    def count_write(self, n=1):
        self.link_writes += n

    def count_rotation(self):
        self.rotations += 1

    def count_rebalance(self):
        self.rebalances += 1

    def start_timing(self):
        self.start_time = time.perf_counter()

    def stop_timing(self):
        if self.start_time is not None:
            self.total_time_ms = (time.perf_counter() - self.start_time) * 1000
            self.start_time = None

    def reset(self):
        self.visits = 0
        self.link_writes = 0
        self.rotations = 0
        self.rebalances = 0
        self.total_time_ms = 0.0
        self.start_time = None

    def show_report(self, title="Reporte de operaciones"):
        logger.info(
            "%s: visitas=%d escrituras=%d rotaciones=%d rebalanceos=%d tiempo=%.2f ms",
            title, self.visits, self.link_writes, self.rotations,
            self.rebalances, self.total_time_ms,
        )


_counter = OpCounter()

def count_visit(n=1):
    _counter.count_visit(n)

def count_write(n=1):
    _counter.count_write(n)

def count_rotation():
    _counter.count_rotation()

def count_rebalance():
    _counter.count_rebalance()

def start_timing():
    _counter.start_timing()

def stop_timing():
    _counter.stop_timing()

def reset_counters():
    _counter.reset()

def show_report(title="Reporte global"):
    _counter.show_report(title)

def get_counters():
    return {
        'visits': _counter.visits,
        'link_writes': _counter.link_writes,
        'rotations': _counter.rotations,
        'rebalances': _counter.rebalances,
        'total_time_ms': _counter.total_time_ms
    }
