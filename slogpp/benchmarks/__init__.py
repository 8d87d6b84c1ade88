"""Throughput benchmarks comparing the logging back-ends."""