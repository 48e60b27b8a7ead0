"""
Core synchronization engine.

The `SyncCoordinator` prepares the per-date directory tree and fans document
retrievals out over a bounded worker pool, delegating each retrieval to the
`DocumentDownloader`.
"""
