# ABOUTME: MediaWiki-specific fetching and wikitext parsing
# ABOUTME: Raw page access through index.php and note-count field extraction
