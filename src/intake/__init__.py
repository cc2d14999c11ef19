"""Order intake: accept JSON orders over HTTP and store them relationally."""
