def percentage_to_marks(attendance_percentage, thresholds):
    """
    Convert an attendance percentage to CIE attendance marks.

    Bands are inclusive at their lower edge:
    >= marks5 -> 5, >= marks4 -> 4, >= marks3 -> 3, otherwise 0.
    """
    if attendance_percentage >= thresholds.marks5:
        return 5
    if attendance_percentage >= thresholds.marks4:
        return 4
    if attendance_percentage >= thresholds.marks3:
        return 3
    return 0


def attendance_percentage(classes_attended, total_classes):
    if not total_classes:
        return 0.0
    return round((classes_attended / total_classes) * 100, 2)
