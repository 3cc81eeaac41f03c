"""Line Shift Merge: a 5x5 line-shifting chain-merge puzzle."""
