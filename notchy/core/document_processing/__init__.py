"""
Document processing package.

Loading, chunking, embedding and vector upsert of uploaded PDFs.
"""
