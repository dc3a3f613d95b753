# solver/logger.py

import csv
import time

class SolverLogger:
    """
    Logs solver events (master solves, new patterns, convergence, integer solve) to CSV.
    Also handles timing.
    """
    def __init__(self, log_file="solver_log.csv"):
        self.log_file = log_file
        self.file_handle = None
        self.csv_writer = None
        self.start_time = time.time()

    def open(self):
        if self.file_handle:
            return
        self.start_time = time.time()
        self.file_handle = open(self.log_file, "w", newline="")
        self.csv_writer = csv.writer(self.file_handle)
        # write header
        self.csv_writer.writerow(["timestamp","event","iteration","objective","details"])

    def close(self):
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None
            self.csv_writer = None

    def log_event(self, event, iteration, objective, details=""):
        if not self.csv_writer:
            return
        t = time.time() - self.start_time
        self.csv_writer.writerow([f"{t:.2f}", event, iteration, objective, details])
        self.file_handle.flush()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        self.close()
