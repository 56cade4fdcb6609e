"""GRF archive reading: entries, directory tree and the archive itself."""