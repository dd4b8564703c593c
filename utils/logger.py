"""
Logger utility for the Divide & Conquer Algorithm Benchmarks.

Provides per-run logging with verbosity levels.
"""

from typing import Optional
from datetime import datetime


class BenchmarkLogger:
    """
    Logger for benchmark runs and verification results.

    Format: "[mergesort n=1000 random] 1.234 ms | cmp=... swp=... alloc=... depth=..."
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable debug output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Benchmark Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_run(
        self,
        algorithm: str,
        size: int,
        input_type: str,
        time_ms: float,
        comparisons: int,
        swaps: int,
        allocations: int,
        max_depth: int
    ) -> None:
        """
        Log one completed algorithm run.

        Args:
            algorithm: Algorithm name
            size: Input size
            input_type: Input distribution name
            time_ms: Elapsed wall-clock time
            comparisons: Comparison count
            swaps: Swap count
            allocations: Allocated elements
            max_depth: Maximum recursion depth
        """
        message = (
            f"[{algorithm} n={size} {input_type}] {time_ms:.3f} ms | "
            f"cmp={comparisons} swp={swaps} alloc={allocations} depth={max_depth}"
        )
        self.log(message, "debug")

    def log_mismatch(self, algorithm: str, size: int, input_type: str, detail: str) -> None:
        """
        Log a failed verification.

        Args:
            algorithm: Algorithm name
            size: Input size
            input_type: Input distribution name
            detail: What disagreed with the reference
        """
        self.log(f"{algorithm} n={size} {input_type}: verification FAILED ({detail})", "error")

    def log_section(self, title: str) -> None:
        """Log a section banner."""
        self.log(f"\n{'-'*60}")
        self.log(title)
        self.log(f"{'-'*60}")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
