"""Line store and tab provider contracts plus in-memory implementations."""
