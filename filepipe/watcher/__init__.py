"""This module provides poll based file watching with a step pipeline.

A ``WatchSet`` holds the files to watch, in order, along with the polling
interval, the retry budget and the decode step shared by every file. Each
``WatchedFile`` carries its own transform steps and a finalize step.

The ``PipelineEngine`` stats every file once per pass. When a file's mtime
has changed (or on the first pass) the file is decoded, run through its
transforms and finalized. Steps may ask to be retried; the engine sleeps for
the configured interval between attempts and gives up once the retry budget
is spent. Any fatal failure stops the engine for every file, not just the one
being processed.

Change detection is stat and mtime only, there is no event based backend.
"""
