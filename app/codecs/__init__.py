"""
app/codecs package marker.
"""
