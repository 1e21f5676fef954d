"""Shared constants for the build_audit package."""

# Files whose content can change the build result
SCRIPT_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
# Only these may contain JSX
JSX_EXTENSIONS: tuple[str, ...] = (".jsx", ".tsx")
STYLE_EXTENSIONS: tuple[str, ...] = (".css",)
SOURCE_EXTENSIONS: tuple[str, ...] = SCRIPT_EXTENSIONS + STYLE_EXTENSIONS

# Output lines shorter than this are never captured as unknown errors
MIN_UNKNOWN_LINE_LENGTH = 10

# How many error messages a summary quotes verbatim
SUMMARY_TOP_ERRORS = 3

# Module that generated pages import their icons from
ICON_PACKAGE = "lucide-react"

# Substituted for icon names the icon package does not export
FALLBACK_ICON = "Circle"

# Icon components generated pages commonly use
KNOWN_ICONS: set[str] = {
    "Activity", "AlertCircle", "AlertTriangle", "Archive", "ArrowDown", "ArrowLeft",
    "ArrowRight", "ArrowUp", "Award", "BarChart", "BarChart2", "BarChart3", "Bell",
    "Book", "Bookmark", "Box", "Building", "Building2", "Calendar", "Camera",
    "Check", "CheckCircle", "ChevronDown", "ChevronLeft", "ChevronRight", "ChevronUp",
    "Circle", "Clock", "Copy", "CreditCard", "Crown", "DollarSign", "Download",
    "Edit", "ExternalLink", "Eye", "EyeOff", "Facebook", "File", "FileText", "Filter",
    "Flame", "Folder", "Gift", "Globe", "Grid", "Heart", "HelpCircle", "Home",
    "Image", "Info", "Instagram", "Key", "Layers", "LayoutDashboard", "Link",
    "Linkedin", "List", "Loader", "Lock", "LogIn", "LogOut", "Mail", "Map", "MapPin",
    "Medal", "Megaphone", "Menu", "MessageCircle", "MessageSquare", "Minus", "Moon",
    "MoreHorizontal", "MoreVertical", "Package", "Palette", "Paperclip", "Pause",
    "Phone", "Play", "Plus", "PlusCircle", "RefreshCw", "Save", "Scissors", "Search",
    "Send", "Settings", "Share", "Shield", "ShoppingBag", "ShoppingCart", "Smartphone",
    "Sparkles", "Star", "Sun", "Tag", "Target", "ThumbsUp", "Trash", "TrendingDown",
    "TrendingUp", "Trophy", "Twitter", "Upload", "User", "UserCheck", "UserCog",
    "UserPlus", "Users", "Video", "Wallet", "X", "Zap",
}  # fmt: skip
