"""
targz.src

Core modules for the archive pipeline:
- builder: uncompressed .tar creation using tarfile
- selector: size/availability policy for choosing a compressor
- compressor: pluggable gzip-compatible backends (zopfli, pigz, gzip)
- pipeline: orchestration of build -> select -> compress
"""
