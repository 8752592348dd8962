"""Running the massdns program and handling its output."""