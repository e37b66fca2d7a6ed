"""uMshado marketplace API."""
