"""
Bird guide crawler.

Walks the listing page of birds.peipsi.org, classifies its links into
order headings, family headings and species pages, and extracts a record
for every species tagged with the order and family it was listed under.
"""
