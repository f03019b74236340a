"""
Pytest configuration and fixtures for podcast-share tests.

This module runs before any test imports, setting up the test environment.
Environment variables are explicitly set to ensure deterministic test behavior
regardless of external environment configuration.
"""

import os

import pytest

# Force share settings to their defaults so a local .env cannot change results
os.environ["SHARE_BASE_URL"] = "https://share.example.com"
os.environ["SHARE_MAX_CHARS"] = "1900"
os.environ["SHARE_MINIMAL_MAX_CHARS"] = "800"
os.environ["SHARE_MAX_URL_LENGTH"] = "2000"
os.environ["LOG_LEVEL"] = "INFO"


# Sample RSS feed shared by parser and service tests
SAMPLE_RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd"
     xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Test Podcast</title>
    <description>A podcast for testing</description>
    <link>https://example.com</link>
    <atom:link href="https://example.com/feed.xml" rel="self" type="application/rss+xml"/>
    <itunes:author>Test Author</itunes:author>
    <itunes:image href="https://example.com/artwork.jpg"/>

    <item>
      <title>Episode 1: Introduction</title>
      <description>The first episode of our podcast.</description>
      <link>https://example.com/ep1</link>
      <guid>episode-1-guid</guid>
      <pubDate>Mon, 01 Jan 2024 12:00:00 +0000</pubDate>
      <itunes:duration>01:30:00</itunes:duration>
      <enclosure url="https://example.com/ep1.mp3"
                 length="54000000"
                 type="audio/mpeg"/>
    </item>

    <item>
      <title>Episode 2: Deep Dive</title>
      <description><![CDATA[<p>A deeper look at the <b>topic</b>.</p>]]></description>
      <guid>episode-2-guid</guid>
      <pubDate>Mon, 08 Jan 2024 12:00:00 +0000</pubDate>
      <itunes:duration>45:30</itunes:duration>
      <itunes:image href="https://example.com/ep2.jpg"/>
      <enclosure url="https://example.com/ep2.mp3"
                 length="27000000"
                 type="audio/mpeg"/>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def sample_feed_xml():
    """Return the shared sample RSS feed."""
    return SAMPLE_RSS_FEED
