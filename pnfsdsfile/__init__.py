"""pnfsdsfile: show or clear where an MDS file's data lives on a pNFS data server."""

__version__ = '1.0.0'
