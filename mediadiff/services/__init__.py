"""
Services Package for mediadiff.

This package contains the "service layer" of the application: functions that
perform one well-defined step of a scan and bridge the pipeline (the "when" and
"how many at once") with the domain model (the "what").

- **File Discovery Service (`walk_directory`, `should_inspect`, `discover_candidates`):**
  Walks the scan root and filters the entries down to candidate files, logging
  and skipping unreadable directories.

- **Probe Service (`probe_file`):**
  Probes one candidate with ffprobe and turns it into a `MediaSummary`, or None
  when the file is not reportable media. It never raises for per-file problems,
  which makes it safe to run in a worker pool.
"""
