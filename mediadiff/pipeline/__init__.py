"""
The pipeline package orchestrates a complete scan.

`report_pipeline.ReportPipeline` ties file discovery, the concurrent probe
fan-out and report assembly together.
"""
