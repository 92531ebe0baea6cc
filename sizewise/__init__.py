"""sizewise: regional ring-size conversion over a fixed reference chart."""
